import base64
import hashlib
import logging

from resume_ai.llm_interaction import fingerprint
from resume_ai.llm_interaction.fingerprint import hash_key


def test_deterministic():
    assert hash_key("abc") == hash_key("abc")


def test_different_inputs_differ():
    assert hash_key("abc") != hash_key("abd")


def test_sha256_url_safe_unpadded():
    expected = base64.urlsafe_b64encode(hashlib.sha256(b"abc").digest()).rstrip(b"=").decode()
    key = hash_key("abc")
    assert key == expected
    assert len(key) == 43
    assert "=" not in key and "+" not in key and "/" not in key


def test_unicode_input():
    assert hash_key("résumé") == hash_key("résumé")
    assert hash_key("résumé") != hash_key("resume")


def test_degraded_fallback_is_logged(monkeypatch, caplog):
    def unavailable(data):
        raise ValueError("unsupported hash type sha256")

    monkeypatch.setattr(fingerprint, "_sha256", unavailable)

    with caplog.at_level(logging.WARNING, logger=fingerprint.__name__):
        key = hash_key("abc")

    assert key.startswith("crc32-")
    assert key == hash_key("abc")
    assert any("weaker" in r.getMessage() for r in caplog.records)
