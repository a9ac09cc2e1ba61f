import json

import pytest

from wytcore.okxentity import (
    CrossChainQuoteData,
    MessariErrorResponse,
    QuotesData,
    SupportedChain,
    Token,
    TokenPrice,
    Tx,
    from_json_dict,
    parse_okx_response,
    to_json_dict,
)


def test_parse_envelope_with_items():
    body = json.dumps(
        {
            "code": "0",
            "msg": "",
            "data": [{"chainIndex": "501", "tokenAddress": "11111111111111111111111111111111", "price": "150.2"}],
        }
    )
    res = parse_okx_response(body, TokenPrice)
    assert res.code == "0"
    assert res.data[0].chain_index == "501"
    assert res.data[0].price == "150.2"


def test_parse_envelope_keeps_raw_items_without_type():
    res = parse_okx_response({"code": "0", "data": [{"chainId": 1}]})
    assert res.data == [{"chainId": 1}]


def test_supported_chain_generic_id():
    chain = from_json_dict(SupportedChain, {"chainId": 1, "chainName": "Ethereum"})
    assert chain.chain_id == 1
    assert chain.chain_name == "Ethereum"


def test_token_omitempty():
    assert to_json_dict(Token(token_symbol="USDT")) == {"tokenSymbol": "USDT"}


def test_tx_from_key():
    tx = from_json_dict(Tx, {"from": "0xabc", "signatureData": ["s"]})
    assert tx.from_ == "0xabc"
    assert to_json_dict(tx)["from"] == "0xabc"


def test_quotes_round_trip():
    raw = {
        "chainId": "1",
        "fromToken": {"tokenSymbol": "USDT", "decimal": "6"},
        "dexRouterList": [
            {"router": "r", "subRouterList": [{"dexProtocol": [{"dexName": "Uniswap V3", "percent": "100"}]}]}
        ],
        "toTokenAmount": "9999",
    }
    quotes = from_json_dict(QuotesData, raw)
    assert quotes.dex_router_list[0].sub_router_list[0].dex_protocol[0].dex_name == "Uniswap V3"
    assert from_json_dict(QuotesData, to_json_dict(quotes)) == quotes


def test_cross_chain_quote_prices():
    q = from_json_dict(CrossChainQuoteData, {"fromTokenUnitPrice": 1, "routerList": [{"needApprove": 1}]})
    assert q.from_token_unit_price == 1.0
    assert q.router_list[0].need_approve == 1


def test_messari_nested_status():
    err = from_json_dict(MessariErrorResponse, {"status": {"error_code": 404, "error_message": "not found"}})
    assert err.status.error_code == 404
    assert err.status.error_message == "not found"


def test_bad_item_type_rejected():
    with pytest.raises(ValueError):
        parse_okx_response({"code": "0", "data": ["x"]}, TokenPrice)