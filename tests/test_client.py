"""
Tests for the MutaClient GraphQL transport.
"""
import pytest
import requests

from muta_sdk.client import ZERO_ADDRESS, MutaClient
from muta_sdk.config import ClientConfig
from muta_sdk.exceptions import GraphQLError, ReceiptTimeoutError, TransportError
from muta_sdk.models import ExecResp, QueryServiceParam, Receipt, Transaction

from tests.test_helpers import (
    TEST_CHAIN_ID,
    TEST_ENDPOINT,
    TEST_TX_HASH,
    GraphQLResponder,
    height_response,
    receipt_response,
)


def test_client_initialization():
    """Test client initialization with default and explicit endpoints"""
    client = MutaClient()
    assert client.endpoint == "http://127.0.0.1:8000/graphql"

    client = MutaClient("https://node.example.com/graphql")
    assert client.endpoint == "https://node.example.com/graphql"
    assert client.config.endpoint == "https://node.example.com/graphql"


@pytest.mark.parametrize("endpoint", ["ftp://node.example.com", "node.example.com/graphql", "http://"])
def test_client_rejects_bad_endpoint(endpoint):
    with pytest.raises(ValueError, match="endpoint must be an http"):
        MutaClient(endpoint)


def test_client_context_manager():
    session = requests.Session()
    with MutaClient(session=session) as client:
        assert client.session is session


@pytest.mark.asyncio
async def test_get_latest_height(muta_client, requests_mock):
    requests_mock.post(TEST_ENDPOINT, json=height_response(0x2a))
    assert await muta_client.get_latest_height() == 42


@pytest.mark.asyncio
async def test_compose_transaction(muta_client, requests_mock):
    """The transaction expires timeout_gap blocks after the current height"""
    requests_mock.post(TEST_ENDPOINT, json=height_response(100))

    tx = await muta_client.compose_transaction(
        service_name="asset", method="transfer", payload={"to": "0xdef", "value": 10}
    )

    assert isinstance(tx, Transaction)
    assert tx.chain_id == TEST_CHAIN_ID
    assert tx.timeout == hex(100 + 20)
    assert tx.cycles_limit == "0xffff"
    assert tx.payload == '{"to": "0xdef", "value": 10}'
    assert tx.nonce.startswith("0x") and len(tx.nonce) == 66


@pytest.mark.asyncio
async def test_compose_transaction_overrides_cycles(muta_client, requests_mock):
    requests_mock.post(TEST_ENDPOINT, json=height_response(1))

    tx = await muta_client.compose_transaction("asset", "transfer", "raw", cycles_limit=500, cycles_price="0x2")

    assert tx.cycles_limit == "0x1f4"
    assert tx.cycles_price == "0x2"
    assert tx.payload == "raw"


@pytest.mark.asyncio
async def test_compose_transaction_nonces_are_unique(muta_client, requests_mock):
    requests_mock.post(TEST_ENDPOINT, json=height_response(1))

    first = await muta_client.compose_transaction("asset", "transfer", {"value": 1})
    second = await muta_client.compose_transaction("asset", "transfer", {"value": 1})

    assert first.nonce != second.nonce
    assert first.model_dump(exclude={"nonce"}) == second.model_dump(exclude={"nonce"})


@pytest.mark.asyncio
async def test_query_service_dyn(muta_client, requests_mock):
    """Payload is JSON-encoded on the way out and ret decoded on the way back"""
    responder = GraphQLResponder({
        "queryService": {"data": {"queryService": {"isError": False, "ret": '{"balance":100}'}}},
    })
    requests_mock.post(TEST_ENDPOINT, json=responder)

    result = await muta_client.query_service_dyn(
        QueryServiceParam(service_name="asset", method="get_balance", payload={"address": "0xabc"})
    )

    assert result == ExecResp(is_error=False, ret={"balance": 100})
    variables = responder.variables("queryService")
    assert variables == {
        "serviceName": "asset",
        "method": "get_balance",
        "payload": '{"address": "0xabc"}',
        "caller": ZERO_ADDRESS,
    }


@pytest.mark.asyncio
async def test_query_service_keeps_raw_ret(muta_client, requests_mock):
    requests_mock.post(
        TEST_ENDPOINT,
        json={"data": {"queryService": {"isError": True, "ret": "method not found"}}},
    )

    result = await muta_client.query_service({"serviceName": "asset", "method": "nope", "height": 9})

    assert result.is_error is True
    assert result.ret == "method not found"
    assert requests_mock.last_request.json()["variables"]["height"] == "0x9"


@pytest.mark.asyncio
async def test_query_service_dyn_plain_string(muta_client, requests_mock):
    requests_mock.post(TEST_ENDPOINT, json={"data": {"queryService": {"isError": False, "ret": "hello"}}})

    result = await muta_client.query_service_dyn({"serviceName": "metadata", "method": "get_metadata"})

    assert result.ret == "hello"
    assert requests_mock.last_request.json()["variables"]["payload"] == ""


@pytest.mark.asyncio
@pytest.mark.parametrize("ret", ["NaN", "Infinity", "-Infinity"])
async def test_query_service_dyn_keeps_non_json_constants(muta_client, requests_mock, ret):
    """Tokens Python's json accepts but JSON does not are left as strings"""
    requests_mock.post(TEST_ENDPOINT, json={"data": {"queryService": {"isError": False, "ret": ret}}})

    result = await muta_client.query_service_dyn({"serviceName": "asset", "method": "get_balance"})

    assert result.ret == ret


@pytest.mark.asyncio
async def test_send_transaction_splits_record(muta_client, requests_mock):
    """The flat submission record is split into inputRaw and inputEncryption"""
    responder = GraphQLResponder({"sendTransaction": {"data": {"sendTransaction": TEST_TX_HASH}}})
    requests_mock.post(TEST_ENDPOINT, json=responder)
    record = {
        "chainId": TEST_CHAIN_ID, "cyclesLimit": "0xffff", "cyclesPrice": "0xffff",
        "nonce": "0x" + "01" * 32, "timeout": "0x14", "serviceName": "asset",
        "method": "transfer", "payload": "{}",
        "txHash": TEST_TX_HASH, "pubkey": "0x02" + "11" * 32, "signature": "0x" + "22" * 64,
    }

    tx_hash = await muta_client.send_transaction(record)

    assert tx_hash == TEST_TX_HASH
    variables = responder.variables("sendTransaction")
    assert variables["inputEncryption"] == {
        "txHash": TEST_TX_HASH, "pubkey": "0x02" + "11" * 32, "signature": "0x" + "22" * 64,
    }
    assert variables["inputRaw"]["serviceName"] == "asset"
    assert "txHash" not in variables["inputRaw"]


@pytest.mark.asyncio
async def test_send_transaction_missing_fields(muta_client):
    with pytest.raises(ValueError, match="missing fields: .*pubkey"):
        await muta_client.send_transaction({"chainId": "0x01"})


@pytest.mark.asyncio
async def test_get_receipt(muta_client, requests_mock):
    requests_mock.post(TEST_ENDPOINT, json=receipt_response('{"ok":true}'))

    receipt = await muta_client.get_receipt(TEST_TX_HASH)

    assert isinstance(receipt, Receipt)
    assert receipt.tx_hash == TEST_TX_HASH
    # the transport leaves decoding to the caller
    assert receipt.response.ret == '{"ok":true}'
    assert receipt.events[0].service == "asset"


@pytest.mark.asyncio
async def test_get_receipt_waits_for_commit(muta_client, requests_mock):
    """Missing receipts are polled until the node has one"""
    responder = GraphQLResponder({
        "getReceipt": [
            {"data": {"getReceipt": None}},
            {"errors": [{"message": "receipt not found"}], "data": None},
            receipt_response("done"),
        ],
    })
    requests_mock.post(TEST_ENDPOINT, json=responder)

    receipt = await muta_client.get_receipt(TEST_TX_HASH)

    assert receipt.response.ret == "done"
    assert len(responder.calls["getReceipt"]) == 3


@pytest.mark.asyncio
async def test_get_receipt_timeout(muta_client, requests_mock):
    requests_mock.post(TEST_ENDPOINT, json={"errors": [{"message": "receipt not found"}]})

    with pytest.raises(ReceiptTimeoutError) as excinfo:
        await muta_client.get_receipt(TEST_TX_HASH, timeout=0.05, poll_interval=0.01)

    assert excinfo.value.tx_hash == TEST_TX_HASH
    assert isinstance(excinfo.value.__cause__, GraphQLError)


@pytest.mark.asyncio
async def test_get_receipt_http_error_is_not_retried(muta_client, requests_mock):
    """Transport failures while waiting propagate immediately"""
    requests_mock.post(TEST_ENDPOINT, status_code=502, text="bad gateway")

    with pytest.raises(TransportError):
        await muta_client.get_receipt(TEST_TX_HASH)

    assert requests_mock.call_count == 1


@pytest.mark.asyncio
async def test_graphql_errors(muta_client, requests_mock):
    requests_mock.post(
        TEST_ENDPOINT,
        json={"errors": [{"message": "invalid chain id"}, {"message": "bad nonce"}]},
    )

    with pytest.raises(GraphQLError, match="invalid chain id; bad nonce") as excinfo:
        await muta_client.execute("query x { y }")

    assert len(excinfo.value.errors) == 2


@pytest.mark.asyncio
async def test_connection_error(muta_client, requests_mock):
    requests_mock.post(TEST_ENDPOINT, exc=requests.exceptions.ConnectionError("refused"))

    with pytest.raises(TransportError, match="GraphQL request failed"):
        await muta_client.get_latest_height()


@pytest.mark.asyncio
async def test_invalid_json_response(muta_client, requests_mock):
    requests_mock.post(TEST_ENDPOINT, text="<html>oops</html>")

    with pytest.raises(TransportError, match="Invalid JSON"):
        await muta_client.get_latest_height()


@pytest.mark.asyncio
async def test_malformed_height_response(muta_client, requests_mock):
    requests_mock.post(TEST_ENDPOINT, json={"data": {"getBlock": None}})

    with pytest.raises(TransportError, match="Malformed getBlock"):
        await muta_client.get_latest_height()


def test_config_endpoint_used():
    config = ClientConfig(endpoint="https://node.example.com/graphql", http_timeout=3)
    client = MutaClient(config=config)
    assert client.endpoint == "https://node.example.com/graphql"
    assert client.timeout == 3
