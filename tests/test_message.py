"""Tests for the canonical message and HMAC calculation."""

import hashlib
import hmac

from odinauth.message import b64_decode, b64_encode, canonical_message
from odinauth.signing import hmac_for, hmac_hex

KNOWN_MESSAGE = b"bG9naW5fbmFtZQ,cm9sZTEscm9sZTIscm9sZTM,1337357387,bmV0Y2F0"


def test_b64_encode_strips_padding_and_uses_urlsafe_alphabet():
    assert b64_encode("login_name") == "bG9naW5fbmFtZQ"
    assert b64_encode("role1,role2,role3") == "cm9sZTEscm9sZTIscm9sZTM"
    assert b64_encode(b"\xfb\xff") == "-_8"
    assert "=" not in b64_encode("a")


def test_b64_decode_restores_padding():
    assert b64_decode("bG9naW5fbmFtZQ") == b"login_name"
    assert b64_decode("-_8") == b"\xfb\xff"
    assert b64_decode("") == b""


def test_canonical_message_known_fields():
    """Message for the reference vector matches byte for byte."""
    message = canonical_message("login_name", "role1,role2,role3", 1337357387, "netcat")
    assert message == KNOWN_MESSAGE


def test_canonical_message_accepts_bytes_and_text_alike():
    assert canonical_message(b"login_name", b"role1,role2,role3", 1337357387, b"netcat") == KNOWN_MESSAGE


def test_commas_in_fields_do_not_collide():
    """Shifting a comma between fields changes the message."""
    a = canonical_message("user,", "roles", 1, "ua")
    b = canonical_message("user", ",roles", 1, "ua")
    assert a != b
    assert a.count(b",") == 3
    assert b.count(b",") == 3


def test_hmac_for_known_vector():
    """HMAC-SHA256 over the canonical message, keyed with the shared secret."""
    expected = hmac.new(b"secret", KNOWN_MESSAGE, hashlib.sha256).hexdigest()
    sig = hmac_for("secret", "login_name", "role1,role2,role3", 1337357387, "netcat")
    assert sig == expected
    assert len(sig) == 64
    assert sig == sig.lower()


def test_hmac_hex_is_deterministic_and_keyed():
    assert hmac_hex("secret", b"message") == hmac_hex(b"secret", b"message")
    assert hmac_hex("secret", b"message") != hmac_hex("other", b"message")


def test_hmac_for_binds_user_agent():
    a = hmac_for("secret", "login_name", "role1", 1337357387, "netcat")
    b = hmac_for("secret", "login_name", "role1", 1337357387, "curl")
    assert a != b
