from scripts.client import ContractClient
from scripts.utils import abort, with_deployment


def is_already_verified(error) -> bool:
    return "already verified" in str(error).lower()


@with_deployment(full=True)
def main(deployment):
    client = ContractClient.from_variant(deployment.variant)
    arguments = client.variant.constructor_arguments(
        deployment.deployer_address, deployment.base_uri
    )
    print(f"Verifying contract at: {deployment.contract_address}")
    print(f"Constructor arguments: {arguments}")

    nft = client.attach_at(deployment.contract_address)
    try:
        if client.is_verified(nft):
            print("Contract is already verified.")
            return
        verified = client.publish_source(nft)
    except (ValueError, OSError) as exc:
        if is_already_verified(exc):
            print("Contract is already verified.")
            return
        abort(f"Verification failed: {exc}")

    if not verified:
        abort("Verification failed: rejected by the block explorer")
    print("Contract verification successful!")
