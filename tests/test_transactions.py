import pytest

from deterministic_deployment.errors import InvalidNonce, InvalidTransaction, MalformedHex
from deterministic_deployment.transactions import (
    DEFAULT_GAS_LIMIT,
    DEFAULT_GAS_PRICE,
    DEFAULT_NONCE,
    TransactionOverrides,
    UnsignedTransaction,
    build_transaction,
)

PAYLOAD = bytes.fromhex("00112233445566778899")


def test_defaults_apply_without_overrides():
    tx = build_transaction(PAYLOAD, 1)
    assert (tx.nonce, tx.gas_price, tx.gas_limit) == (DEFAULT_NONCE, DEFAULT_GAS_PRICE, DEFAULT_GAS_LIMIT)
    assert DEFAULT_GAS_PRICE == 100_000_000_000
    assert DEFAULT_GAS_LIMIT == 100_000
    assert tx.value == 0


def test_gas_price_override_scenario():
    tx = build_transaction(PAYLOAD, 5, TransactionOverrides(gas_price=20_000_000_000))
    assert tx == UnsignedTransaction(
        nonce=0,
        gas_price=20_000_000_000,
        gas_limit=100_000,
        chain_id=5,
        data=PAYLOAD,
        value=0,
    )
    assert len(tx.data) == 10


@pytest.mark.parametrize(
    "overrides, expected",
    [
        ({"nonce": 4}, (4, DEFAULT_GAS_PRICE, DEFAULT_GAS_LIMIT)),
        ({"gas_limit": 60_000}, (0, DEFAULT_GAS_PRICE, 60_000)),
        ({"gasPrice": 7, "gasLimit": 8}, (0, 7, 8)),
        ({"gas_price": 1, "gas_limit": 2, "nonce": 3}, (3, 1, 2)),
        ({"gas_price": None, "nonce": None}, (0, DEFAULT_GAS_PRICE, DEFAULT_GAS_LIMIT)),
    ],
)
def test_each_override_wins_independently(overrides, expected):
    tx = build_transaction(PAYLOAD, 1, overrides)
    assert (tx.nonce, tx.gas_price, tx.gas_limit) == expected


def test_explicit_zero_is_an_override():
    tx = build_transaction(PAYLOAD, 1, TransactionOverrides(gas_price=0))
    assert tx.gas_price == 0


def test_hex_bytecode_is_decoded_unmodified():
    assert build_transaction("0x00112233445566778899", 1).data == PAYLOAD
    assert build_transaction("00112233445566778899", 1).data == PAYLOAD


def test_as_dict_is_a_contract_creation():
    tx = build_transaction(PAYLOAD, 137, {"nonce": 2})
    assert tx.as_dict() == {
        "nonce": 2,
        "gasPrice": DEFAULT_GAS_PRICE,
        "gas": DEFAULT_GAS_LIMIT,
        "value": 0,
        "data": PAYLOAD,
        "chainId": 137,
    }


@pytest.mark.parametrize("overrides", [{"gas_price": -1}, {"gas_limit": -5}, {"gas_limit": 1.5}])
def test_rejects_invalid_gas_fields(overrides):
    with pytest.raises(InvalidTransaction):
        build_transaction(PAYLOAD, 1, overrides)


@pytest.mark.parametrize("nonce", [-1, 2**64])
def test_rejects_invalid_nonce(nonce):
    with pytest.raises(InvalidNonce):
        build_transaction(PAYLOAD, 1, {"nonce": nonce})


def test_rejects_negative_chain_id_and_bad_bytecode():
    with pytest.raises(InvalidTransaction):
        build_transaction(PAYLOAD, -1)
    with pytest.raises(MalformedHex):
        build_transaction("0xnothex", 1)
    with pytest.raises(InvalidTransaction):
        build_transaction(12345, 1)  # type: ignore[arg-type]
