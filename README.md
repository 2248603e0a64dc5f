# availprim

Primitives for a data-availability blockchain, in pure Python with no
third-party dependencies.

## What it provides

- `availprim.codec`: compact little-endian binary encoding.
  `encode_compact`, `encode_bytes` (compact length prefix plus data) and
  `encode_u16` / `encode_u32` / `encode_u64` write values. A `Reader`
  consumes them again and raises `CodecError` on short or non-canonical
  input. `blake2_256` returns a 32-byte BLAKE2b digest.
- `availprim.data_lookup`: `DataLookup`, the index of application data
  kept in every header. `DataLookup.from_extrinsics` builds it from
  `(app_id, data_len)` pairs sorted by application id. Entries with app id
  0 get no index entry. It raises `SizeOverflowError` when the total
  exceeds 32 bits and `UnsortedExtrinsicsError` when the input is not
  sorted. Both are subclasses of `DataLookupError`.
- `availprim.app_id`: `AppExtrinsic` (raw data tagged with an app id) and
  `get_app_id`. `get_app_id` reads an `app_id` attribute or method, takes
  the last element of an 8-tuple, and defaults to 0.
- `availprim.kate_commitment`: `KateCommitment`, an extrinsics root that
  holds a 32-byte hash, a commitment and the matrix rows and columns. It
  has binary and JSON encodings.
- `availprim.header`: `Header`, `Digest`, `DigestItem` and
  `DigestItemKind`. `Header.new` builds a header from a plain root hash,
  `Header.new_extended` from a full commitment and data lookup. Headers
  encode to bytes (`encode`, `decode`, `from_bytes`), hash with
  `Header.hash`, and convert to and from camelCase JSON mappings
  (`to_json`, `from_json`). The block number is written as a hex quantity
  by `serialize_number` and read back by `deserialize_number`.
- `availprim.extrinsic`: `AppUncheckedExtrinsic` with versioned,
  length-prefixed encoding. You supply the encoders and decoders for
  calls and signatures. `check` looks up the signer and verifies the
  signature over a `SignedPayload`, which is hashed when longer than 256
  bytes. It returns a `CheckedExtrinsic` or raises `BadProofError`.
- `availprim.constants`: chain constants such as `KATE_PUBLIC_PARAMS`,
  `NORMAL_DISPATCH_RATIO`, `BLOCK_CHUNK_SIZE` and the currency units `AVL`,
  `CENTS` and `MILLICENTS`. It also has `InvalidTransactionCustomId`,
  `perbill_of` and the benchmark-only `bench_random`.
- `availprim.weights`: `RuntimeDbWeight` and `SystemWeights`, which give
  the saturating dispatch weights of the system calls.
- `availprim.voter_bags`: the bag `THRESHOLDS` and `bag_threshold_for`.
- `availprim.offchain`: `Signer` and `Account`. A signer selects keystore
  keys, either all of them (`Signer.all_accounts`) or the first that works
  (`Signer.any_account`), optionally narrowed with `with_filter`. It signs
  messages or payloads with them.
- `availprim.transactions`: `TransactionPool`, `submit_transaction`,
  `submit_unsigned_transaction`, `send_signed_transaction`, which
  increments nonces after a successful submission, and
  `send_unsigned_transaction`.

## What it does not do

- It does not run a node, a runtime, block production or an RPC server.
- It does not build data matrices or Kate proofs. `KateCommitment` only
  carries a commitment computed elsewhere.
- It contains no signature scheme. Signing and verification go through the
  `crypto` object or `verify` callable that you pass in.
- It keeps no persistent state. Pools, keystores and nonce maps are plain
  in-memory objects that you provide.

## Installing

```
pip install .
```

## Example

```python
from availprim.data_lookup import DataLookup
from availprim.header import serialize_number, deserialize_number

lookup = DataLookup.from_extrinsics([(0, 5), (0, 10), (1, 5), (1, 10), (2, 100), (2, 50)])
assert lookup.size == 180
assert lookup.index == [(1, 15), (2, 30)]
assert DataLookup.from_bytes(lookup.encode()) == lookup

assert serialize_number(2**64) == "0x10000000000000000"
assert deserialize_number("0xffffffffffffffff") == 2**64 - 1
```

## Running the tests

```
pip install .[test]
python -m pytest
```