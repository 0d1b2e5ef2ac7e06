"""Config 설정 검증 테스트"""

import pytest
from pydantic import ValidationError

from app.core.config import Settings

VALID_KEY = "valid-internal-api-key-with-32-characters-minimum"


class TestDevelopmentConfig:
    """개발 환경 설정 테스트"""

    def test_development_allows_default_keys(self):
        """개발 환경에서는 기본 키 허용"""
        config = Settings(
            app_env="development",
            internal_api_key="your-internal-api-key-here",
        )
        assert config.is_development
        assert config.internal_api_key == "your-internal-api-key-here"

    def test_scoring_and_prune_defaults(self):
        """관심사/추천 기본값"""
        config = Settings()

        assert config.recommendation_top_k == 1
        assert config.recommendation_cache_ttl_seconds == 3600
        assert config.interest_prune_min_days == 14
        assert config.interest_prune_max_score == 1.0
        assert config.interest_update_max_retries == 3
        assert config.external_api_timeout == 10.0

    def test_cors_origins_from_comma_separated_string(self):
        """CORS origin 문자열 파싱"""
        config = Settings(cors_origins="http://a.com, http://b.com")

        assert config.cors_origins == ["http://a.com", "http://b.com"]

    @pytest.mark.parametrize(
        "field", ["recommendation_top_k", "interest_update_max_retries"]
    )
    def test_rejects_non_positive_counts(self, field):
        """개수 설정은 1 이상"""
        with pytest.raises(ValidationError):
            Settings(**{field: 0})

    def test_rejects_unknown_provider(self):
        """알 수 없는 추천 제공자 거부"""
        with pytest.raises(ValidationError):
            Settings(recommendation_provider="naver")


class TestProductionConfig:
    """프로덕션 환경 설정 검증 테스트"""

    def test_production_rejects_default_internal_api_key(self):
        """프로덕션에서 기본 Internal API Key 거부"""
        with pytest.raises(ValidationError) as exc_info:
            Settings(
                app_env="production",
                internal_api_key="your-internal-api-key-here",
            )

        assert "INTERNAL_API_KEY" in str(exc_info.value)

    def test_production_rejects_short_internal_api_key(self):
        """프로덕션에서 짧은 Internal API Key 거부"""
        with pytest.raises(ValidationError) as exc_info:
            Settings(app_env="production", internal_api_key="short-key")

        assert "32 characters" in str(exc_info.value)

    def test_production_requires_tour_api_key_for_tourism(self):
        """관광공사 제공자 사용 시 API 키 필수"""
        with pytest.raises(ValidationError) as exc_info:
            Settings(
                app_env="production",
                internal_api_key=VALID_KEY,
                recommendation_provider="tourism",
                korea_tour_api_key="",
            )

        assert "KOREA_TOUR_API_KEY" in str(exc_info.value)

    def test_production_accepts_valid_keys(self):
        """프로덕션에서 유효한 키 허용"""
        config = Settings(
            app_env="production",
            internal_api_key=VALID_KEY,
            recommendation_provider="tourism",
            korea_tour_api_key="tour-key",
        )
        assert config.is_production
        assert len(config.internal_api_key) >= 32
