import pytest
from pydantic import ValidationError as PydanticValidationError

from rendition_store.core.utils.config import RenditionConfig


class TestRenditionConfig:
    def test_defaults(self) -> None:
        config = RenditionConfig()

        assert config.environment == "production"
        assert config.is_stubbed is False
        assert config.s3_bucket is None
        assert config.s3_force_path_style is True
        assert config.convert_binary == "convert"
        assert config.transcode_timeout == 10.0

    def test_test_environment_is_stubbed(self) -> None:
        assert RenditionConfig(environment="test").is_stubbed is True

    def test_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "test")
        monkeypatch.setenv("RENDITION_S3_BUCKET_NAME", "uploads")
        monkeypatch.setenv("AWS_REGION", "eu-west-1")
        monkeypatch.setenv("AWS_ENDPOINT_URL", "http://127.0.0.1:8080/")
        monkeypatch.setenv("RENDITION_S3_FORCE_PATH_STYLE", "false")
        monkeypatch.setenv("RENDITION_S3_SIGNATURE_VERSION", "s3v4")
        monkeypatch.setenv("RENDITION_REKOGNITION_REGION", "eu-west-1")
        monkeypatch.setenv("RENDITION_TRANSCODE_TIMEOUT", "2.5")
        monkeypatch.setenv("RENDITION_CONVERT_BINARY", "magick")

        config = RenditionConfig.from_env()

        assert config.is_stubbed is True
        assert config.s3_bucket == "uploads"
        assert config.s3_region == "eu-west-1"
        assert config.s3_endpoint == "http://127.0.0.1:8080/"
        assert config.s3_force_path_style is False
        assert config.s3_signature_version == "s3v4"
        assert config.rekognition_region == "eu-west-1"
        assert config.transcode_timeout == 2.5
        assert config.convert_binary == "magick"

    @pytest.mark.parametrize("raw", ["0", "no", "off", "False"])
    def test_force_path_style_false_spellings(self, monkeypatch, raw) -> None:
        monkeypatch.setenv("RENDITION_S3_FORCE_PATH_STYLE", raw)

        assert RenditionConfig.from_env().s3_force_path_style is False

    def test_from_env_uses_defaults_for_missing_values(self) -> None:
        assert RenditionConfig.from_env() == RenditionConfig()

    def test_keyword_arguments_override_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("RENDITION_S3_BUCKET_NAME", "from-env")

        assert RenditionConfig(s3_bucket="explicit").s3_bucket == "explicit"

    def test_invalid_timeout_in_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("RENDITION_TRANSCODE_TIMEOUT", "-1")

        with pytest.raises(PydanticValidationError):
            RenditionConfig.from_env()

    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(PydanticValidationError):
            RenditionConfig(transcode_timeout=0)

    def test_config_is_frozen(self) -> None:
        config = RenditionConfig()

        with pytest.raises(PydanticValidationError):
            config.environment = "test"
