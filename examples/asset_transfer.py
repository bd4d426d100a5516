#!/usr/bin/env python3
"""
Example of transferring an asset with the Muta SDK.
"""
import asyncio
import os

from muta_sdk import Account, AssetService, MutaClient, MutaError, create_service_binding
from muta_sdk.service.builtin import ASSET_SERVICE


async def main():
    """
    Demonstrate basic usage of the service bindings.

    This example shows how to:
    1. Query a balance through a bound read method
    2. Compose an unsigned transfer for offline signing
    3. Transfer as a fixed account and wait for the receipt
    """
    ENDPOINT = os.environ.get("MUTA_ENDPOINT", "http://127.0.0.1:8000/graphql")
    PRIVATE_KEY = os.environ.get("PRIVATE_KEY")
    ASSET_ID = os.environ.get("ASSET_ID")
    RECIPIENT = os.environ.get("RECIPIENT", "0x" + "00" * 19 + "01")

    if not PRIVATE_KEY:
        print("ERROR: PRIVATE_KEY environment variable is required")
        return

    if not ASSET_ID:
        print("ERROR: ASSET_ID environment variable is required")
        return

    account = Account(PRIVATE_KEY)
    print(f"Using account {account.address}")

    async with MutaClient(ENDPOINT) as client:
        asset = AssetService(client, account)

        try:
            balance = await asset.get_balance({"asset_id": ASSET_ID, "user": account.address})
            print(f"Balance: {balance.ret}")

            binding = create_service_binding("asset", ASSET_SERVICE, client)
            unsigned = await binding.transfer({"asset_id": ASSET_ID, "to": RECIPIENT, "value": 1})
            print(f"Composed unsigned transaction with nonce {unsigned.nonce}")

            receipt = await asset.transfer({"asset_id": ASSET_ID, "to": RECIPIENT, "value": 1})
            print("Transfer committed!")
            print(f"Transaction hash: {receipt.tx_hash}")
            print(f"Block height: {receipt.height}")
            print(f"Result: {receipt.response.ret}")

        except MutaError as e:
            print(f"Error transferring asset: {e}")


if __name__ == "__main__":
    asyncio.run(main())
