from .chain import (
    TEST_CHAIN_ID,
    TEST_ENDPOINT,
    TEST_PRIV_KEY,
    TEST_TX_HASH,
    GraphQLResponder,
    create_stub_client,
    create_stub_signer,
    height_response,
    make_receipt,
    make_transaction,
    receipt_response,
)
