# pumpfun-watch

A small library for spotting new pump.fun token launches in Solana
transaction logs.

Given the log lines of a transaction that invoked the pump.fun program
(`6EF8rrecthR5Dkzon8Nwu78hRvfCKubJ14M5uBEwF6P`), the package finds the
top-level `Create` instructions, decodes the base64 `Program data:` payload
that carries the token's name, symbol, metadata URI and the mint,
bonding-curve and creator addresses, and can append each launch to a JSON
log file.

## What it does not do

The package has no command-line program and does not connect to a Solana
node or a streaming service. Fetching transactions is left to you: pass the
log messages and slot of each transaction you receive to the functions
below.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Usage

### Finding launches in a transaction's logs

```python
from pumpfun_watch.logs import format_launch, parse_instruction

launches = parse_instruction(log_messages)   # list of CreateTokenInfo
for info in launches:
    print(format_launch(info, slot))
```

`parse_instruction` follows the program's `invoke` / `success` nesting and
only considers instructions made at the top level. An instruction log line
containing `Create` marks a create; `Buy` or `Sell` marks a trade
(`InstructionKind.CREATE` and `InstructionKind.TRADE`). Within each top-level
call the longest `Program data:` payload is kept, and when the call succeeds
with a create instruction, that payload is decoded. Payloads that fail to
decode are skipped silently.

`format_launch(info, slot)` returns the announcement text: token address,
bonding-curve address, name, symbol, owner and slot, one per line.

### Handling a whole transaction

```python
from pumpfun_watch.logs import process_transaction_logs

launches = process_transaction_logs(slot, log_messages, failed, "create_token_log.json")
```

If `failed` is true nothing is done and an empty list is returned. Otherwise,
for every launch found, the announcement is printed, the launch is appended
to the JSON file (`create_token_log.json` in the current directory by
default), and `---` is printed. The launches found are returned.

### Decoding a payload directly

```python
from datetime import datetime, timezone
from pumpfun_watch.tokens import TokenDataError, parse_create_token_data

try:
    info = parse_create_token_data(payload_base64, datetime.now(timezone.utc))
except TokenDataError as exc:
    print(f"not a create event: {exc}")
else:
    print(info.name, info.symbol, info.mint)
```

The payload layout is an 8-byte discriminator (skipped only when the data is
longer than 8 bytes), three UTF-8 strings (name, symbol, URI) each preceded by
a little-endian `u32` length, then three 32-byte public keys (mint, bonding
curve, user), which are returned base58-encoded. Invalid base64, truncated
data and invalid UTF-8 raise `TokenDataError`, a subclass of `ValueError`.

`created_at` is formatted as `YYYY-MM-DD HH:MM:SS` from the `now` argument,
or from the current UTC time when it is omitted.

`b58encode(data)` encodes raw bytes with the Bitcoin base58 alphabet, the
same way the public keys are encoded.

### The JSON log

`append_to_json_file(info, path)` keeps a file of the form

```json
{
  "results": [
    {
      "name": "...",
      "symbol": "...",
      "uri": "...",
      "mint": "...",
      "bonding_curve": "...",
      "user": "...",
      "created_at": "YYYY-MM-DD HH:MM:SS"
    }
  ]
}
```

A missing or unreadable file starts a new list. The function prints
`Results logged to <path>` and returns the full list of stored launches.

`CreateTokenInfo` is a frozen dataclass; `to_dict()` and
`CreateTokenInfo.from_dict(mapping)` convert single entries to and from this
shape. `from_dict` raises `TokenDataError` if a field is missing or is not a
string.