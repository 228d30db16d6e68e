"""NEAR transaction building, borsh encoding and ed25519 signing."""

import hashlib
import json
from dataclasses import dataclass, field
from typing import Union

import base58
from nacl.signing import SigningKey

from intentswap.exceptions import ExecutionSetupError

# Action enum variants in the NEAR protocol
ACTION_FUNCTION_CALL = 2
ACTION_TRANSFER = 3

KEY_TYPE_ED25519 = 0

TGAS = 10**12
FT_TRANSFER_CALL_GAS = 300 * TGAS
ONE_YOCTO = 1


def _u8(value: int) -> bytes:
    return value.to_bytes(1, "little")


def _u32(value: int) -> bytes:
    return value.to_bytes(4, "little")


def _u64(value: int) -> bytes:
    return value.to_bytes(8, "little")


def _u128(value: int) -> bytes:
    return value.to_bytes(16, "little")


def _string(value: str) -> bytes:
    raw = value.encode()
    return _u32(len(raw)) + raw


def _bytes(value: bytes) -> bytes:
    return _u32(len(value)) + value


@dataclass(frozen=True)
class TransferAction:
    """Native NEAR transfer, amount in yoctoNEAR."""

    amount: int

    def encode(self) -> bytes:
        return _u8(ACTION_TRANSFER) + _u128(self.amount)

    def describe(self) -> dict:
        return {"type": "Transfer", "params": {"deposit": str(self.amount)}}


@dataclass(frozen=True)
class FunctionCallAction:
    method_name: str
    args: dict
    gas: int
    deposit: int

    @property
    def args_json(self) -> bytes:
        return json.dumps(self.args, separators=(",", ":")).encode()

    def encode(self) -> bytes:
        return (
            _u8(ACTION_FUNCTION_CALL)
            + _string(self.method_name)
            + _bytes(self.args_json)
            + _u64(self.gas)
            + _u128(self.deposit)
        )

    def describe(self) -> dict:
        return {
            "type": "FunctionCall",
            "params": {
                "methodName": self.method_name,
                "args": self.args,
                "gas": str(self.gas),
                "deposit": str(self.deposit),
            },
        }


Action = Union[TransferAction, FunctionCallAction]


def ft_transfer_call(receiver_id: str, amount: str) -> FunctionCallAction:
    """NEP-141 transfer with an empty callback message."""
    return FunctionCallAction(
        method_name="ft_transfer_call",
        args={"receiver_id": receiver_id, "amount": amount, "msg": ""},
        gas=FT_TRANSFER_CALL_GAS,
        deposit=ONE_YOCTO,
    )


@dataclass
class Transaction:
    signer_id: str
    public_key: bytes
    nonce: int
    receiver_id: str
    block_hash: bytes
    actions: list[Action] = field(default_factory=list)

    def encode(self) -> bytes:
        """Borsh-serialize the transaction."""
        result = _string(self.signer_id)
        result += _u8(KEY_TYPE_ED25519) + self.public_key
        result += _u64(self.nonce)
        result += _string(self.receiver_id)
        result += self.block_hash
        result += _u32(len(self.actions))
        for action in self.actions:
            result += action.encode()
        return result

    def hash(self) -> bytes:
        """sha256 of the encoded transaction; this is what gets signed."""
        return hashlib.sha256(self.encode()).digest()


def encode_signed_transaction(tx: Transaction, signature: bytes) -> bytes:
    """Transaction followed by an ed25519 signature."""
    if len(signature) != 64:
        raise ValueError(f"ed25519 signature must be 64 bytes, got {len(signature)}")
    return tx.encode() + _u8(KEY_TYPE_ED25519) + signature


def transaction_id(tx: Transaction) -> str:
    """Base58 transaction hash as shown by explorers."""
    return base58.b58encode(tx.hash()).decode()


def encode_public_key(public_key: bytes) -> str:
    """``ed25519:<base58>`` form used by RPC queries."""
    return f"ed25519:{base58.b58encode(public_key).decode()}"


def public_key_from_implicit_account(account_id: str) -> bytes:
    """Implicit accounts are the hex of their ed25519 public key."""
    try:
        public_key = bytes.fromhex(account_id)
    except ValueError:
        raise ExecutionSetupError(f"{account_id} is not an implicit NEAR account", chain="near")
    if len(public_key) != 32:
        raise ExecutionSetupError(f"{account_id} is not an implicit NEAR account", chain="near")
    return public_key


class NearKeyPair:
    """ed25519 key pair parsed from ``ed25519:<base58>``.

    Accepts the 64-byte secret key form exported by NEAR wallets and the
    bare 32-byte seed.
    """

    def __init__(self, signing_key: SigningKey):
        self._signing_key = signing_key

    @classmethod
    def from_string(cls, value: str) -> "NearKeyPair":
        encoded = value.strip()
        if encoded.startswith("ed25519:"):
            encoded = encoded[len("ed25519:"):]
        try:
            raw = base58.b58decode(encoded)
        except ValueError:
            raise ExecutionSetupError("NEAR private key is not valid base58", chain="near")

        if len(raw) == 64:
            seed = raw[:32]
        elif len(raw) == 32:
            seed = raw
        else:
            raise ExecutionSetupError(
                f"NEAR private key has unexpected length {len(raw)}", chain="near"
            )
        return cls(SigningKey(seed))

    @property
    def public_key(self) -> bytes:
        return bytes(self._signing_key.verify_key)

    @property
    def public_key_str(self) -> str:
        return encode_public_key(self.public_key)

    @property
    def implicit_account_id(self) -> str:
        return self.public_key.hex()

    def sign(self, message: bytes) -> bytes:
        return self._signing_key.sign(message).signature

    def sign_transaction(self, tx: Transaction) -> bytes:
        """Return the encoded signed transaction."""
        return encode_signed_transaction(tx, self.sign(tx.hash()))

    def __repr__(self) -> str:
        return f"NearKeyPair({self.public_key_str})"
