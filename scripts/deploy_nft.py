from brownie import network

from scripts.client import ContractClient, configured_base_uri
from scripts.deployment import DeploymentRecord, save
from scripts.utils import explorer_address_url, get_deployer


def main():
    deployer = get_deployer()
    print(f"Deploying NFT contract with the account: {deployer.address}")

    client = ContractClient.from_variant()
    base_uri = configured_base_uri()
    nft = client.deploy(deployer, base_uri)
    print(f"NFT contract deployed to: {nft.address}")

    explorer_url = explorer_address_url(nft.address)
    if explorer_url is not None:
        print(f"Verify on block explorer: {explorer_url}")

    record = DeploymentRecord(
        contract_address=nft.address,
        deployer_address=deployer.address,
        base_uri=base_uri,
        contract_name=client.name,
        chain_id=network.chain.id,
    )
    path = save(record)
    print(f"Deployment info saved to {path}")
    return nft
