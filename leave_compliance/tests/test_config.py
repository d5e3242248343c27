"""
Tests for configuration validation
"""
import pytest
from pydantic import ValidationError
from leave_compliance.core.config import Settings


def test_prod_settings_rejects_wildcard_origins():
    """Test that production settings reject wildcard origins"""
    settings = Settings(
        DATABASE_URL="postgresql://test",
        JWT_SECRET_KEY="a" * 32,
        APP_ENV="prod",
        ALLOWED_ORIGINS="*"
    )

    with pytest.raises(ValueError, match="ALLOWED_ORIGINS"):
        settings.validate_production()


def test_prod_settings_rejects_short_jwt_secret():
    """Test that production settings reject short JWT secret"""
    settings = Settings(
        DATABASE_URL="postgresql://test",
        JWT_SECRET_KEY="short",
        APP_ENV="prod",
        ALLOWED_ORIGINS="https://example.com"
    )

    with pytest.raises(ValueError, match="JWT_SECRET_KEY"):
        settings.validate_production()


def test_local_settings_allows_wildcard_origins():
    """Test that local settings allow wildcard origins"""
    settings = Settings(
        DATABASE_URL="postgresql://test",
        JWT_SECRET_KEY="test-key",
        APP_ENV="local",
        ALLOWED_ORIGINS="*"
    )

    settings.validate_production()
    assert settings.get_allowed_origins_list() == ["*"]


def test_get_allowed_origins_list():
    """Test parsing of ALLOWED_ORIGINS"""
    settings = Settings(
        DATABASE_URL="postgresql://test",
        JWT_SECRET_KEY="test-key",
        ALLOWED_ORIGINS="https://example.com, https://app.example.com"
    )
    origins = settings.get_allowed_origins_list()
    assert origins == ["https://example.com", "https://app.example.com"]


def test_invalid_app_env_rejected():
    with pytest.raises(ValidationError):
        Settings(DATABASE_URL="postgresql://test", JWT_SECRET_KEY="test-key", APP_ENV="dev")


def test_log_level_is_normalised():
    settings = Settings(DATABASE_URL="postgresql://test", JWT_SECRET_KEY="test-key", LOG_LEVEL="debug")
    assert settings.LOG_LEVEL == "DEBUG"


def test_compliance_defaults():
    settings = Settings(DATABASE_URL="postgresql://test", JWT_SECRET_KEY="test-key")
    assert settings.COMPLIANCE_RULES_FILE is None
    assert settings.COMPLIANCE_READ_WORKERS == 4


def test_negative_read_workers_rejected():
    with pytest.raises(ValidationError, match="COMPLIANCE_READ_WORKERS"):
        Settings(DATABASE_URL="postgresql://test", JWT_SECRET_KEY="test-key", COMPLIANCE_READ_WORKERS=-1)
