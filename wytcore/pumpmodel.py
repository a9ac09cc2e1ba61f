"""Data models for pump data queries and dataset query results."""

import dataclasses
import json
import types
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Union, get_args, get_origin


def _f(name: str, default: Any = dataclasses.MISSING, *, factory: Any = dataclasses.MISSING, omit: bool = False) -> Any:
    meta = {"json": name, "omitempty": omit}
    if factory is not dataclasses.MISSING:
        return field(default_factory=factory, metadata=meta)
    return field(default=default, metadata=meta)


def _is_empty(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, (str, list, dict)):
        return len(value) == 0
    if isinstance(value, (int, float)):
        return value == 0
    return False


def to_json_dict(obj: Any) -> Any:
    """Convert a model (or list of models) to JSON-ready values, honouring omitempty."""
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        out = {}
        for f in dataclasses.fields(obj):
            value = getattr(obj, f.name)
            if f.metadata.get("omitempty") and _is_empty(value):
                continue
            out[f.metadata.get("json", f.name)] = to_json_dict(value)
        return out
    if isinstance(obj, list):
        return [to_json_dict(v) for v in obj]
    if isinstance(obj, dict):
        return {k: to_json_dict(v) for k, v in obj.items()}
    if isinstance(obj, datetime):
        return obj.isoformat()
    return obj


def _decode(tp: Any, value: Any) -> Any:
    origin = get_origin(tp)
    if origin in (Union, types.UnionType):
        if value is None:
            return None
        inner = [a for a in get_args(tp) if a is not type(None)]
        return _decode(inner[0], value)
    if origin is list:
        (item,) = get_args(tp) or (Any,)
        return [_decode(item, v) for v in value or []]
    if origin is dict or tp is Any:
        return value
    if dataclasses.is_dataclass(tp):
        return _from_json_dict(tp, value or {})
    if value is None:
        return tp() if tp in (int, float, str) else None
    if tp is datetime:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if tp is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"expected number, got {value!r}")
        return float(value)
    if tp is int:
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value != int(value):
            raise ValueError(f"expected integer, got {value!r}")
        return int(value)
    if tp is str:
        if not isinstance(value, str):
            raise ValueError(f"expected string, got {value!r}")
        return value
    return value


def _from_json_dict(cls: type, data: dict) -> Any:
    if not isinstance(data, dict):
        raise ValueError(f"expected object for {cls.__name__}, got {data!r}")
    kwargs = {}
    for f in dataclasses.fields(cls):
        key = f.metadata.get("json", f.name)
        if key in data:
            kwargs[f.name] = _decode(f.type, data[key])
    return cls(**kwargs)


@dataclass
class DatasetQueryResultsMetadataColumn:
    base_type: str = _f("base_type", "", omit=True)
    display_name: str = _f("display_name", "", omit=True)
    name: str = _f("name", "", omit=True)
    effective_type: str = _f("effective_type", "", omit=True)


@dataclass
class DatasetQueryResultsColTarget:
    id: int = _f("id", 0, omit=True)
    name: str = _f("name", "", omit=True)
    display_name: str = _f("display_name", "", omit=True)
    table_id: int = _f("table_id", 0, omit=True)
    description: str = _f("description", "", omit=True)
    base_type: str = _f("base_type", "", omit=True)
    effective_type: str = _f("effective_type", "", omit=True)
    visibility_type: str = _f("visibility_type", "", omit=True)


@dataclass
class DatasetQueryResultsColFingerprintGlobal:
    distinct_count: int = _f("distinct-count", 0, omit=True)


@dataclass
class DatasetQueryResultsColFingerprint:
    global_: DatasetQueryResultsColFingerprintGlobal = _f(
        "global", factory=DatasetQueryResultsColFingerprintGlobal, omit=True
    )
    type: dict = _f("type", factory=dict, omit=True)


@dataclass
class DatasetQueryResultsCol:
    description: str = _f("description", "", omit=True)
    table_id: int = _f("table_id", 0, omit=True)
    schema_name: str = _f("schema_name", "", omit=True)
    effective_type: str = _f("effective_type", "", omit=True)
    name: str = _f("name", "", omit=True)
    source: str = _f("source", "", omit=True)
    remapped_from: str = _f("remapped_from", "", omit=True)
    extra_info: dict = _f("extra_info", factory=dict, omit=True)
    fk_field_id: str = _f("fk_field_id", "", omit=True)
    remapped_to: str = _f("remapped_to", "", omit=True)
    id: int = _f("id", 0, omit=True)
    visibility_type: str = _f("visibility_type", "", omit=True)
    target: DatasetQueryResultsColTarget = _f("target", factory=DatasetQueryResultsColTarget, omit=True)
    display_name: str = _f("display_name", "", omit=True)
    fingerprint: DatasetQueryResultsColFingerprint = _f(
        "fingerprint", factory=DatasetQueryResultsColFingerprint, omit=True
    )
    base_type: str = _f("base_type", "", omit=True)


@dataclass
class DatasetQueryResultsNativeForm:
    query: str = _f("query", "", omit=True)


@dataclass
class DatasetQueryResultsMetadata:
    checksum: str = _f("checksum", "", omit=True)
    columns: list[DatasetQueryResultsMetadataColumn] = _f("columns", factory=list, omit=True)


@dataclass
class DatasetQueryResultsData:
    rows: list[list[Any]] = _f("rows", factory=list, omit=True)
    native_form: DatasetQueryResultsNativeForm = _f("native_form", factory=DatasetQueryResultsNativeForm, omit=True)
    cols: list[DatasetQueryResultsCol] = _f("cols", factory=list, omit=True)
    results_metadata: DatasetQueryResultsMetadata = _f(
        "results_metadata", factory=DatasetQueryResultsMetadata, omit=True
    )
    rows_truncated: int = _f("rows_truncated", 0, omit=True)


@dataclass
class DatasetQueryNative:
    query: str = _f("query", "", omit=True)


@dataclass
class DatasetQueryDslPage:
    page: int = _f("page", 0, omit=True)
    items: int = _f("items", 0, omit=True)


@dataclass
class DatasetQueryDsl:
    source_table: int = _f("source_table", 0, omit=True)
    limit: int = _f("limit", 0, omit=True)
    page: DatasetQueryDslPage = _f("page", factory=DatasetQueryDslPage, omit=True)


@dataclass
class DatasetQueryConstraints:
    max_results: int = _f("max-results", 0, omit=True)
    max_results_bare_rows: int = _f("max-results-bare-rows", 0, omit=True)


@dataclass
class DatasetQueryJsonQuery:
    database: int = _f("database", 0, omit=True)
    type: str = _f("type", "", omit=True)
    native: DatasetQueryNative = _f("native", factory=DatasetQueryNative, omit=True)
    query: DatasetQueryDsl = _f("query", factory=DatasetQueryDsl, omit=True)
    constraints: DatasetQueryConstraints = _f("constraints", factory=DatasetQueryConstraints, omit=True)


@dataclass
class DatasetQueryResults:
    started_at: datetime | None = _f("started_at", None, omit=True)
    json_query: DatasetQueryJsonQuery = _f("json_query", factory=DatasetQueryJsonQuery, omit=True)
    average_execution_time: float = _f("average_execution_time", 0.0, omit=True)
    status: str = _f("status", "", omit=True)
    context: str = _f("context", "", omit=True)
    row_count: int = _f("row_count", 0, omit=True)
    running_time: int = _f("running_time", 0, omit=True)
    data: DatasetQueryResultsData = _f("data", factory=DatasetQueryResultsData, omit=True)


def parse_dataset_query_results(data: bytes | str | dict) -> DatasetQueryResults:
    """Decode a dataset query response body into DatasetQueryResults."""
    if not isinstance(data, dict):
        data = json.loads(data)
    return _from_json_dict(DatasetQueryResults, data)


@dataclass
class CommonPumpDataQuery:
    duration: int = _f("duration", 0)
    timezone: str = _f("timezone", "")
    max_win_rate: float = _f("max_win_rate", 0.0)
    address: str = _f("address", "")
    source: str = _f("source", "")


@dataclass
class DailyTokensData:
    date: str = _f("date", "")
    total_count: int = _f("total_count", 0)
    p2r_count: int = _f("p2r_count", 0)
    p2r_ratio: float = _f("p2r_ratio", 0.0)


@dataclass
class NewTokensVO:
    rows: list[DailyTokensData] = _f("rows", factory=list)


@dataclass
class LaunchTimeData:
    time_range: str = _f("time_range", "")
    launched_count: int = _f("launched_count", 0)


@dataclass
class LaunchTimeVO:
    rows: list[LaunchTimeData] = _f("rows", factory=list)


@dataclass
class TradeCountData:
    date: str = _f("date", "")
    trade_count: int = _f("trade_count", 0)


@dataclass
class TransactionsVO:
    rows: list[TradeCountData] = _f("rows", factory=list)


@dataclass
class TopTraderData:
    trader: str = _f("trader", "")
    total_net_profit: float = _f("total_net_profit", 0.0)
    net_profit_win_ratio: float = _f("net_profit_win_ratio", 0.0)
    gross_profit_win_ratio: float = _f("gross_profit_win_ratio", 0.0)
    total_tx_count: int = _f("total_tx_count", 0)


@dataclass
class TopTradersVO:
    rows: list[TopTraderData] = _f("rows", factory=list)


@dataclass
class TraderInfo:
    address: str = _f("address", "")
    tag: list[str] = _f("tag", factory=list)


@dataclass
class TraderInfoVO:
    info: TraderInfo | None = _f("info", None)


@dataclass
class TraderOverviewInfo:
    total_net_profit: float = _f("total_net_profit", 0.0)
    net_profit_win_ratio: float = _f("net_profit_win_ratio", 0.0)
    gross_profit_win_ratio: float = _f("gross_profit_win_ratio", 0.0)
    traded_token_count: int = _f("traded_token_count", 0)
    total_tx_count: int = _f("total_tx_count", 0)
    success_tx_count: int = _f("success_tx_count", 0)
    reverted_tx_count: int = _f("reverted_tx_count", 0)
    traded_token_count_percentage: float = _f("traded_token_count_percentage", 0.0)
    sniped_token_count: int = _f("sniped_token_count", 0)
    sniped_token_count_percentage: float = _f("sniped_token_count_percentage", 0.0)
    total_gross_profit: float = _f("total_gross_profit", 0.0)
    avg_sol_cost_per_token: float = _f("avg_sol_cost_per_token", 0.0)
    total_gas_fee: float = _f("total_gas_fee", 0.0)
    total_tip: float = _f("total_tip", 0.0)
    total_commission: float = _f("total_commission", 0.0)
    avg_fee_per_token: float = _f("avg_fee_per_token", 0.0)
    avg_tip_per_token: float = _f("avg_tip_per_token", 0.0)
    avg_buy_count_per_token: float = _f("avg_buy_count_per_token", 0.0)
    avg_sell_count_per_token: float = _f("avg_sell_count_per_token", 0.0)


@dataclass
class TraderOverviewInfoV2:
    total_net_profit: float = _f("total_net_profit", 0.0)
    profit_ratio: float = _f("profit_ratio", 0.0)
    net_profit_win_ratio: float = _f("net_profit_win_ratio", 0.0)
    traded_token_count: int = _f("traded_token_count", 0)
    avg_sol_cost_per_token: float = _f("avg_sol_cost_per_token", 0.0)
    total_cost: float = _f("total_cost", 0.0)
    avg_tip_per_token: float = _f("avg_tip_per_token", 0.0)
    avg_fee_per_token: float = _f("avg_fee_per_token", 0.0)
    token_create_count: int = _f("token_create_count", 0)


@dataclass
class TraderOverviewVO:
    info: TraderOverviewInfoV2 | None = _f("info", None)


@dataclass
class TraderProfitData:
    net_profit: float = _f("net_profit", 0.0)
    gross_profit: float = _f("gross_profit", 0.0)
    date: str = _f("date", "")


@dataclass
class TraderProfitVO:
    rows: list[TraderProfitData] = _f("rows", factory=list)


@dataclass
class ProfitDistributionData:
    profit_margin_bucket: str = _f("profit_margin_bucket", "")
    token_count: int = _f("token_count", 0)


@dataclass
class ProfitDistributionVO:
    rows: list[ProfitDistributionData] = _f("rows", factory=list)


@dataclass
class TraderTradesData:
    time_range: str = _f("time_range", "")
    tx_count: int = _f("tx_count", 0)


@dataclass
class TraderTradesVO:
    rows: list[TraderTradesData] = _f("rows", factory=list)


@dataclass
class Trader:
    address: str = _f("address", "")


@dataclass
class TraderDetailVO:
    trader: Trader | None = _f("trader", None)
    info: TraderOverviewInfoV2 | None = _f("overview", None)
    profit: list[TraderProfitData] = _f("profit", factory=list)
    profit_distribution: list[ProfitDistributionData] = _f("profit_distribution", factory=list)
    trades: list[TraderTradesData] = _f("trades", factory=list)


@dataclass
class GetSupportedChainsReq:
    chain_id: int = _f("chainId", 0)


@dataclass
class GetSupportedTokensReq:
    chain_id: int = _f("chainId", 0)


@dataclass
class GetTokenReq:
    chain_id: int = _f("chainId", 0)
    token_address: str = _f("tokenAddress", "")


@dataclass
class GetQuoteReq:
    chain_id: int = _f("chainId", 0)
    from_token_address: str = _f("fromTokenAddress", "")
    to_token_address: str = _f("toTokenAddress", "")
    amount: str = _f("amount", "")


@dataclass
class ApproveTransactionReq:
    chain_id: int = _f("chainId", 0)
    token_contract_address: str = _f("tokenContractAddress", "")
    approve_amount: str = _f("approveAmount", "")


@dataclass
class SwapReq:
    chain_id: int = _f("chainId", 0)
    amount: str = _f("amount", "")
    from_token_address: str = _f("fromTokenAddress", "")
    to_token_address: str = _f("toTokenAddress", "")
    user_wallet_address: str = _f("userWalletAddress", "")
    swap_receiver_address: str = _f("swapReceiverAddress", "")
    slippage: str = _f("slippage", "")


@dataclass
class GetBridgeTokensPairsReq:
    from_chain_id: int = _f("fromChainId", 0)


@dataclass
class GetCrossChainQuoteReq:
    from_chain_id: int = _f("fromChainId", 0)
    to_chain_id: int = _f("toChainId", 0)
    from_token_address: str = _f("fromTokenAddress", "")
    to_token_address: str = _f("toTokenAddress", "")
    amount: str = _f("amount", "")
    slippage: str = _f("slippage", "")