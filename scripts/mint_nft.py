from brownie.exceptions import VirtualMachineError

from scripts.client import ContractClient
from scripts.utils import abort, get_deployer, load_deployment


def main():
    deployer = get_deployer()
    print(f"Using account: {deployer.address}")

    deployment = load_deployment()
    print(f"Targeting contract at address: {deployment.contract_address}")

    client = ContractClient.from_variant(deployment.variant)
    nft = client.attach_at(deployment.contract_address)

    recipient = deployer.address
    print(f"Attempting to mint a new NFT to: {recipient}...")
    try:
        tx = client.mint(nft, recipient, deployer)
        print(f"Transaction sent with hash: {tx.txid}")
        print("Waiting for transaction confirmation...")
        tx.wait(1)
    except (VirtualMachineError, ValueError, OSError) as exc:
        abort(f"Error during minting process: {exc}")

    if tx.status != 1:
        abort("Transaction failed. Please check the transaction on the block explorer.")

    print("Transaction confirmed successfully!")
    print(f"NFT minted to address: {recipient}")
    return tx
