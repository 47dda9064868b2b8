"""
Pytest tests for the payment normalizer: unit conversion, actor resolution,
validation and skip-and-continue batches.
"""

from __future__ import annotations

import copy

import pytest


def test_to_minor_units_truncates_toward_zero():
    """msat -> sat truncates toward zero and preserves the sign."""
    from zapboard.ledger import to_minor_units

    assert to_minor_units(-2_000_000) == -2000
    assert to_minor_units(2_000_000) == 2000
    assert to_minor_units(-2500) == -2
    assert to_minor_units(2500) == 2
    assert to_minor_units(999) == 0
    assert to_minor_units(1500, unit_factor=1) == 1500
    assert to_minor_units(12.5, unit_factor=1) == 12


def test_to_minor_units_rejects_non_positive_factor():
    from zapboard.ledger import to_minor_units

    with pytest.raises(ValueError):
        to_minor_units(1000, unit_factor=0)


def test_normalize_payment_maps_fields(raw_payments, resolver):
    """Canonical fields: id from checking_id, amount in sats, names resolved."""
    from zapboard.ledger import Transaction, normalize_payment

    tx = normalize_payment(raw_payments[0], resolver)
    assert tx == Transaction(
        id="p1",
        amount=-500,
        occurred_at=raw_payments[0]["time"],
        reference="lnbc1",
        from_actor="Alice",
        to_actor="Bob",
        memo="thanks",
        source_account="w1",
    )
    assert tx.is_outbound


def test_normalize_payment_prefers_id_over_checking_id():
    from zapboard.ledger import normalize_payment

    tx = normalize_payment({"id": 7, "checking_id": "hash", "amount": 1000, "time": 10})
    assert tx.id == "7"
    assert tx.amount == 1


def test_normalize_payment_does_not_mutate_input(raw_payments, resolver):
    from zapboard.ledger import normalize_payment

    before = copy.deepcopy(raw_payments[0])
    normalize_payment(raw_payments[0], resolver)
    assert raw_payments[0] == before


def test_normalize_payment_is_deterministic(raw_payments, resolver):
    """Normalizing the same record twice yields identical amount and time."""
    from zapboard.ledger import normalize_payment

    first = normalize_payment(raw_payments[1], resolver)
    second = normalize_payment(raw_payments[1], resolver)
    assert first == second


def test_unresolved_actors_are_none(resolver):
    """Missing extra, unknown ids and raising resolvers give None, never an error."""
    from zapboard.ledger import normalize_payment

    no_extra = normalize_payment({"id": "x1", "amount": -1000, "time": 1}, resolver)
    assert no_extra.from_actor is None and no_extra.to_actor is None

    unknown = normalize_payment(
        {"id": "x2", "amount": -1000, "time": 1, "extra": {"from": {"id": "zzz"}}}, resolver
    )
    assert unknown.from_actor is None

    def broken(ref):
        raise KeyError(ref)

    raised = normalize_payment(
        {"id": "x3", "amount": -1000, "time": 1, "extra": {"from": {"id": "a"}}}, broken
    )
    assert raised.from_actor is None
    assert raised.amount == -1

    no_resolver = normalize_payment({"id": "x4", "amount": -1000, "time": 1, "extra": {"from": {"id": "a"}}})
    assert no_resolver.from_actor is None


def test_extract_actor_ref_shapes():
    """extra.from may be an object with id, a bare string, or junk."""
    from zapboard.ledger import extract_actor_ref

    assert extract_actor_ref({"from": {"id": "a"}}, "from") == "a"
    assert extract_actor_ref({"from": "b"}, "from") == "b"
    assert extract_actor_ref({"from": {"name": "x"}}, "from") is None
    assert extract_actor_ref({"from": "  "}, "from") is None
    assert extract_actor_ref(None, "from") is None
    assert extract_actor_ref({}, "to") is None


def test_non_mapping_extra_is_ignored(resolver):
    from zapboard.ledger import normalize_payment

    tx = normalize_payment({"id": "x", "amount": -1000, "time": 5, "extra": "garbage"}, resolver)
    assert tx.from_actor is None


def test_iso_time_is_converted_to_unix_seconds():
    from zapboard.ledger import normalize_payment

    tx = normalize_payment({"id": "x", "amount": 1000, "time": "2023-11-14T22:13:20Z"})
    assert tx.occurred_at == 1_700_000_000
    naive = normalize_payment({"id": "y", "amount": 1000, "time": "2023-11-14T22:13:20"})
    assert naive.occurred_at == 1_700_000_000


def test_numeric_strings_are_accepted():
    from zapboard.ledger import normalize_payment

    tx = normalize_payment({"id": "x", "amount": "-3000", "time": "100"})
    assert tx.amount == -3
    assert tx.occurred_at == 100


@pytest.mark.parametrize(
    "record",
    [
        {"amount": -1000, "time": 1},
        {"id": "", "checking_id": "  ", "amount": -1000, "time": 1},
        {"id": "x", "time": 1},
        {"id": "x", "amount": "lots", "time": 1},
        {"id": "x", "amount": True, "time": 1},
        {"id": "x", "amount": float("nan"), "time": 1},
        {"id": "x", "amount": None, "time": 1},
        {"id": "x", "amount": -1000},
        {"id": "x", "amount": -1000, "time": "yesterday"},
    ],
)
def test_malformed_records_raise_validation_error(record):
    from zapboard.core.exceptions import ValidationError
    from zapboard.ledger import normalize_payment

    with pytest.raises(ValidationError):
        normalize_payment(record)


def test_validation_error_carries_record_id():
    from zapboard.core.exceptions import ValidationError
    from zapboard.ledger import normalize_payment

    with pytest.raises(ValidationError) as excinfo:
        normalize_payment({"checking_id": "bad1", "amount": "lots", "time": 1})
    assert excinfo.value.record_id == "bad1"
    assert "amount" in excinfo.value.reason


def test_non_mapping_record_raises_validation_error():
    from zapboard.core.exceptions import ValidationError
    from zapboard.ledger import normalize_payment

    with pytest.raises(ValidationError):
        normalize_payment(["not", "a", "dict"])  # type: ignore[arg-type]


def test_normalize_batch_skips_bad_records_and_continues(raw_payments, resolver):
    """One bad record never drops the rest of the batch."""
    from zapboard.ledger import normalize_batch

    records = [raw_payments[0], {"checking_id": "bad", "amount": "x", "time": 1}, raw_payments[1]]
    transactions, failures = normalize_batch(records, resolver)
    assert [tx.id for tx in transactions] == ["p1", "p2"]
    assert len(failures) == 1
    assert failures[0].index == 1
    assert failures[0].record_id == "bad"


def test_build_actor_resolver(names):
    from zapboard.ledger import build_actor_resolver

    resolve = build_actor_resolver({**names, "empty": ""})
    assert resolve("a") == "Alice"
    assert resolve("missing") is None
    assert resolve("empty") is None


def test_parse_payment_time_matches_normalizer():
    """Unix seconds, numeric strings and ISO 8601 parse; junk gives None."""
    from zapboard.ledger import parse_payment_time

    assert parse_payment_time(1_700_000_000) == 1_700_000_000
    assert parse_payment_time(100.9) == 100
    assert parse_payment_time("100") == 100
    assert parse_payment_time("2023-11-14T22:13:20Z") == 1_700_000_000
    assert parse_payment_time("2023-11-14T22:13:20") == 1_700_000_000
    assert parse_payment_time("yesterday") is None
    assert parse_payment_time(None) is None
    assert parse_payment_time(True) is None
    assert parse_payment_time(float("inf")) is None
