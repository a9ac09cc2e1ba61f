# wytcore

Building blocks for a web3 token trading analysis backend:

- `wytcore.httpclient`: `HttpClient`, a small HTTP client bound to a base
  URL. It joins paths onto the base URL, encodes query parameters and
  returns the raw response body as bytes, whatever the status code.
  `parse_json_response` decodes a JSON body.
- `wytcore.metabase`: `MetabaseDataSource`, which signs in to a Metabase
  server, caches the session token and runs the saved questions (cards)
  behind pump-token and trader statistics.
- `wytcore.pumpmodel`: dataclasses for Metabase dataset query results
  (`DatasetQueryResults` and its parts), for the pump and trader view
  objects (`NewTokensVO`, `TopTradersVO`, `TraderDetailVO`, ...) and for
  DEX request parameters (`GetQuoteReq`, `SwapReq`, ...), together with
  `parse_dataset_query_results` and `to_json_dict`.
- `wytcore.okxentity`: dataclasses for DEX aggregator and cross-chain swap
  responses (`Token`, `QuotesData`, `SwapResponseData`,
  `CrossChainQuoteData`, ...), with `from_json_dict`, `to_json_dict` and
  `parse_okx_response` for the generic `{code, data, msg}` envelope.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Usage

```python
from wytcore.httpclient import HttpClient
from wytcore.metabase import MetabaseDataSource

password = "password"
client = HttpClient("https://metabase.example.com")
source = MetabaseDataSource(client, "analyst@example.com", password)

results = source.daily_launched_token_info(7, "UTC")
for row in results.data.rows:
    print(row)

overview = source.trader_overview_v2("SomeTraderAddress", "CST", 7)
```

Every query method returns a `DatasetQueryResults` parsed from the card's
JSON response. The queries available are:

- `daily_launched_token_info(duration, timezone)`
- `launched_token_time_distribution(duration, timezone)`
- `daily_trade_counts(duration, timezone)`
- `trader_overview(trader)`
- `trader_overview_v2(trader, tz, days)`
- `trader_tx_time_distribution(trader, duration, timezone)`
- `trader_profit_token_distribution(trader, duration, timezone)`
- `trader_profit_distribution(trader, duration, timezone)`
- `top_trader(duration, win_ratio)`

The first three raise a `duration` below 7 to 7 and take an empty
timezone as `"UTC"`; `trader_overview_v2` and `trader_profit_distribution`
take an empty timezone as `"CST"`. `top_trader` queries the 30-day or
7-day card for those durations and the 1-day card for any other.
Timezones other than `"UTC"` and `"CST"` raise `MetabaseError`.

The session token is kept in the `cache` mapping passed to the
constructor (a plain dict by default), keyed by `("auth", username)`.
Failed sign-ins, failed requests and undecodable responses all raise
`MetabaseError`. Used on its own, `HttpClient` raises `HttpClientError`
when the base URL is empty or a request cannot be made.

Parsing DEX API responses:

```python
from wytcore.okxentity import Token, parse_okx_response

response = parse_okx_response(raw_bytes, Token)
for token in response.data:
    print(token.token_symbol, token.token_contract_address)
```

`to_json_dict` turns any of these models back into JSON-ready values,
leaving out empty fields that are marked as omitted when empty.

## What this package does not do

It holds no REST server, no command-line program and no storage. It
defines the DEX aggregator and cross-chain response models but has no
client that calls that API, and it does not turn dataset query results
into the pump and trader view objects; that mapping is left to the
caller.