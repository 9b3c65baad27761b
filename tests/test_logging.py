from praxis.core.logging import redact_secrets


def test_redact_secrets_masks_passwords_and_url_credentials():
    raw = (
        "connect failed url=postgresql+asyncpg://praxis:s3cret@db:5432/praxis "
        "cache=redis://:r3dis@cache:6379/0 password=hunter2"
    )
    masked = redact_secrets(raw)
    assert "s3cret" not in masked
    assert "r3dis" not in masked
    assert "hunter2" not in masked
    assert masked.count("[REDACTED]") == 3
    assert "postgresql+asyncpg://praxis:[REDACTED]@db:5432/praxis" in masked


def test_redact_secrets_leaves_plain_messages_alone():
    message = "Source popular_simulations failed; using default"
    assert redact_secrets(message) == message
