"""Data models for DEX aggregator and cross-chain API responses."""

import json
from dataclasses import dataclass
from typing import Any

from .pumpmodel import _f, _from_json_dict
from .pumpmodel import to_json_dict as _to_json_dict

__all__ = ["from_json_dict", "to_json_dict", "parse_okx_response"]


def from_json_dict(cls: type, data: dict) -> Any:
    """Build a model instance of ``cls`` from a decoded JSON object."""
    return _from_json_dict(cls, data)


def to_json_dict(obj: Any) -> Any:
    """Convert a model (or list of models) to JSON-ready values, honouring omitempty."""
    return _to_json_dict(obj)


@dataclass
class SupportedChain:
    chain_id: Any = _f("chainId", None)
    chain_name: str = _f("chainName", "")
    dex_token_approve_address: str = _f("dexTokenApproveAddress", "")


@dataclass
class Token:
    decimals: str = _f("decimals", "", omit=True)
    decimal: str = _f("decimal", "", omit=True)
    token_contract_address: str = _f("tokenContractAddress", "", omit=True)
    token_logo_url: str = _f("tokenLogoUrl", "", omit=True)
    token_name: str = _f("tokenName", "", omit=True)
    token_symbol: str = _f("tokenSymbol", "", omit=True)
    token_unit_price: str = _f("tokenUnitPrice", "", omit=True)


@dataclass
class CrossChainToken:
    chain_id: str = _f("chainId", "", omit=True)
    decimals: int = _f("decimals", 0, omit=True)
    token_contract_address: str = _f("tokenContractAddress", "", omit=True)
    token_name: str = _f("tokenName", "", omit=True)
    token_symbol: str = _f("tokenSymbol", "", omit=True)


@dataclass
class CrossChainTokenPair:
    from_chain_id: str = _f("fromChainId", "")
    to_chain_id: str = _f("toChainId", "")
    from_token_address: str = _f("fromTokenAddress", "")
    to_token_address: str = _f("toTokenAddress", "")
    from_token_symbol: str = _f("fromTokenSymbol", "")
    to_token_symbol: str = _f("toTokenSymbol", "")


@dataclass
class DexProtocol:
    dex_name: str = _f("dexName", "")
    percent: str = _f("percent", "")


@dataclass
class SubRouter:
    dex_protocol: list[DexProtocol] = _f("dexProtocol", factory=list)
    from_token: Token = _f("fromToken", factory=Token)
    to_token: Token = _f("toToken", factory=Token)


@dataclass
class DexRouter:
    router: str = _f("router", "")
    router_percent: str = _f("routerPercent", "")
    sub_router_list: list[SubRouter] = _f("subRouterList", factory=list)


@dataclass
class QuoteCompare:
    amount_out: str = _f("amountOut", "")
    dex_logo: str = _f("dexLogo", "")
    dex_name: str = _f("dexName", "")
    trade_fee: str = _f("tradeFee", "")


@dataclass
class QuotesData:
    chain_id: str = _f("chainId", "")
    dex_router_list: list[DexRouter] = _f("dexRouterList", factory=list)
    estimate_gas_fee: str = _f("estimateGasFee", "")
    estimate_gas_fee_ui: str = _f("estimateGasFeeUI", "")
    from_token: Token = _f("fromToken", factory=Token)
    from_token_amount: str = _f("fromTokenAmount", "")
    from_token_ui_amount: str = _f("fromTokenUIAmount", "")
    quote_compare_list: list[QuoteCompare] = _f("quoteCompareList", factory=list)
    to_token: Token = _f("toToken", factory=Token)
    to_token_amount: str = _f("toTokenAmount", "")
    to_token_ui_amount: str = _f("toTokenUIAmount", "")


@dataclass
class TransactionData:
    data: str = _f("data", "")
    dex_contract_address: str = _f("dexContractAddress", "")
    gas_limit: str = _f("gasLimit", "")
    gas_price: str = _f("gasPrice", "")


@dataclass
class RouterResult(QuotesData):
    pass


@dataclass
class Tx:
    data: str = _f("data", "")
    from_: str = _f("from", "")
    gas: str = _f("gas", "")
    gas_price: str = _f("gasPrice", "")
    max_priority_fee_per_gas: str = _f("maxPriorityFeePerGas", "")
    min_receive_amount: str = _f("minReceiveAmount", "")
    signature_data: list[str] = _f("signatureData", factory=list)
    to: str = _f("to", "")
    value: str = _f("value", "")


@dataclass
class SwapResponseData:
    router_result: RouterResult = _f("routerResult", factory=RouterResult)
    tx: Tx = _f("tx", factory=Tx)


@dataclass
class Router:
    bridge_id: int = _f("bridgeId", 0)
    bridge_name: str = _f("bridgeName", "")
    cross_chain_fee: str = _f("crossChainFee", "")
    cross_chain_fee_token_address: str = _f("crossChainFeeTokenAddress", "")
    other_native_fee: str = _f("otherNativeFee", "")


@dataclass
class CrossSubRouter:
    dex_protocol: list[DexProtocol] = _f("dexProtocol", factory=list)
    from_token: CrossChainToken = _f("fromToken", factory=CrossChainToken)
    to_token: CrossChainToken = _f("toToken", factory=CrossChainToken)


@dataclass
class CrossDexRouter:
    router: str = _f("router", "")
    router_percent: str = _f("routerPercent", "")
    sub_router_list: list[CrossSubRouter] = _f("subRouterList", factory=list)


@dataclass
class RouterList:
    estimate_time: str = _f("estimateTime", "")
    estimate_gas_fee: str = _f("estimateGasFee", "")
    from_chain_network_fee: str = _f("fromChainNetworkFee", "", omit=True)
    to_chain_network_fee: str = _f("toChainNetworkFee", "", omit=True)
    minimum_received: str = _f("minimumReceived", "", omit=True)
    from_dex_router_list: list[CrossDexRouter] = _f("fromDexRouterList", factory=list)
    need_approve: int = _f("needApprove", 0)
    router: Router = _f("router", factory=Router)
    to_dex_router_list: list[CrossDexRouter] = _f("toDexRouterList", factory=list)
    to_token_amount: str = _f("toTokenAmount", "")


@dataclass
class CrossChainQuoteData:
    from_chain_id: str = _f("fromChainId", "")
    from_token: CrossChainToken = _f("fromToken", factory=CrossChainToken)
    from_token_amount: str = _f("fromTokenAmount", "")
    from_token_ui_amount: str = _f("fromTokenUIAmount", "")
    from_token_unit_price: float = _f("fromTokenUnitPrice", 0.0)
    router_list: list[RouterList] = _f("routerList", factory=list)
    estimate_gas_fee_ui: str = _f("estimateGasFeeUI", "")
    to_chain_id: str = _f("toChainId", "")
    to_token: CrossChainToken = _f("toToken", factory=CrossChainToken)
    to_token_ui_amount: str = _f("toTokenUIAmount", "")
    to_token_unit_price: float = _f("toTokenUnitPrice", 0.0)


@dataclass
class CrossChainTx:
    from_token_amount: str = _f("fromTokenAmount", "")
    router: Router = _f("router", factory=Router)
    to_token_amount: str = _f("toTokenAmount", "")
    minmum_receive: str = _f("minmumReceive", "")
    tx: Tx = _f("tx", factory=Tx)


@dataclass
class TokenPriceReq:
    chain_index: str = _f("chainIndex", "")
    token_address: str = _f("tokenAddress", "")


@dataclass
class TokenPrice:
    chain_index: str = _f("chainIndex", "")
    token_address: str = _f("tokenAddress", "")
    time: str = _f("time", "")
    price: str = _f("price", "")


@dataclass
class OkxApiResponse:
    code: str = _f("code", "")
    data: list[Any] = _f("data", factory=list)
    msg: str = _f("msg", "")


@dataclass
class MessariStatus:
    elapsed: int = _f("elapsed", 0)
    timestamp: str = _f("timestamp", "")
    error_code: int = _f("error_code", 0)
    error_message: str = _f("error_message", "")


@dataclass
class MessariErrorResponse:
    status: MessariStatus = _f("status", factory=MessariStatus)


def parse_okx_response(data: bytes | str | dict, item_type: type | None = None) -> OkxApiResponse:
    """Decode an API envelope, building each data item as ``item_type`` when given."""
    if not isinstance(data, dict):
        data = json.loads(data)
    response = from_json_dict(OkxApiResponse, data)
    if item_type is not None:
        response.data = [from_json_dict(item_type, item) for item in response.data]
    return response