"""
GraphQL documents understood by a Muta node.
"""

GET_LATEST_HEIGHT = """
query getLatestHeight {
  getBlock {
    header {
      height
    }
  }
}
"""

QUERY_SERVICE = """
query queryService(
  $height: Uint64
  $cyclesLimit: Uint64
  $cyclesPrice: Uint64
  $caller: Address!
  $serviceName: String!
  $method: String!
  $payload: String!
) {
  queryService(
    height: $height
    cyclesLimit: $cyclesLimit
    cyclesPrice: $cyclesPrice
    caller: $caller
    serviceName: $serviceName
    method: $method
    payload: $payload
  ) {
    isError
    ret
  }
}
"""

SEND_TRANSACTION = """
mutation sendTransaction(
  $inputRaw: InputRawTransaction!
  $inputEncryption: InputTransactionEncryption!
) {
  sendTransaction(inputRaw: $inputRaw, inputEncryption: $inputEncryption)
}
"""

GET_RECEIPT = """
query getReceipt($txHash: Hash!) {
  getReceipt(txHash: $txHash) {
    txHash
    height
    cyclesUsed
    events {
      data
      service
    }
    stateRoot
    response {
      serviceName
      method
      ret
      isError
    }
  }
}
"""

# Field names of the two sendTransaction input objects
RAW_TRANSACTION_FIELDS = (
    "chainId",
    "cyclesLimit",
    "cyclesPrice",
    "nonce",
    "timeout",
    "serviceName",
    "method",
    "payload",
)
ENCRYPTION_FIELDS = ("txHash", "pubkey", "signature")
