import pytest
from pydantic import ValidationError

from config.settings import Settings, TestingSettings
from validation.secrets import validate_secret_strength

STRONG_ACCESS_SECRET = "access-Secret-0123456789-abcdefghij-ABCDEFGHIJ-klmnop"
STRONG_REFRESH_SECRET = "refresh-Secret-9876543210-qrstuvwxyz-QRSTUVWXYZ-abcdef"


@pytest.mark.unit
def test_strong_secret_accepted():
    assert validate_secret_strength(STRONG_ACCESS_SECRET) == STRONG_ACCESS_SECRET


@pytest.mark.unit
@pytest.mark.parametrize(
    "secret",
    [
        "Short1",
        "a" * 60,
        "lowercase-and-digits-only-0123456789-0123456789-0123",
        "UPPERCASE-AND-DIGITS-ONLY-0123456789-0123456789-0123",
        "Letters-Only-Without-Any-Numbers-At-All-In-This-Secret",
    ],
)
def test_weak_secret_rejected(secret):
    with pytest.raises(ValueError):
        validate_secret_strength(secret)


@pytest.mark.unit
def test_settings_require_both_secrets(monkeypatch):
    monkeypatch.delenv("SECRET_KEY_ACCESS", raising=False)
    monkeypatch.delenv("SECRET_KEY_REFRESH", raising=False)
    with pytest.raises(ValidationError):
        Settings()


@pytest.mark.unit
def test_settings_reject_weak_secret(monkeypatch):
    monkeypatch.setenv("SECRET_KEY_ACCESS", "too-weak")
    monkeypatch.setenv("SECRET_KEY_REFRESH", STRONG_REFRESH_SECRET)
    with pytest.raises(ValidationError):
        Settings()


@pytest.mark.unit
def test_settings_reject_identical_secrets(monkeypatch):
    monkeypatch.setenv("SECRET_KEY_ACCESS", STRONG_ACCESS_SECRET)
    monkeypatch.setenv("SECRET_KEY_REFRESH", STRONG_ACCESS_SECRET)
    with pytest.raises(ValidationError):
        Settings()


@pytest.mark.unit
def test_settings_load_strong_secrets(monkeypatch):
    monkeypatch.setenv("SECRET_KEY_ACCESS", STRONG_ACCESS_SECRET)
    monkeypatch.setenv("SECRET_KEY_REFRESH", STRONG_REFRESH_SECRET)
    settings = Settings()
    assert settings.SECRET_KEY_ACCESS == STRONG_ACCESS_SECRET
    assert settings.SECRET_KEY_REFRESH == STRONG_REFRESH_SECRET
    assert settings.ACCESS_TOKEN_EXPIRE_MINUTES == 15
    assert settings.REFRESH_TOKEN_EXPIRE_MINUTES == 7 * 24 * 60


@pytest.mark.unit
def test_testing_settings_use_distinct_secrets():
    settings = TestingSettings()
    assert settings.SECRET_KEY_ACCESS != settings.SECRET_KEY_REFRESH
