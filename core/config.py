"""Application configuration.

Settings are read from environment variables (or a local `.env` file) with
pydantic-settings. The nutrition variant names are resolved into an
immutable `CalculatorConfig` so the calculator never reads ambient state.
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

from core.exceptions import ConfigurationError
from services.nutrition_calculator import (
    BMR_FORMULAS,
    MACRO_TABLES,
    WEIGHT_LOSS_POLICIES,
    CalculatorConfig,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    database_url: str = "sqlite:///nutrition.db"
    cors_allow_origins: str = "*"
    nutrition_bmr_formula: str = "mifflin_st_jeor"
    nutrition_weight_loss_policy: str = "threshold_percent"
    nutrition_macro_table: str = "standard"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    def allowed_origins(self) -> List[str]:
        """Split the comma separated CORS origins, defaulting to `*`."""
        origins = [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]
        return origins or ["*"]

    def calculator_config(self) -> CalculatorConfig:
        """Build the calculator configuration from the variant names.

        Raises:
            ConfigurationError: If a variant name is not recognized.
        """
        if self.nutrition_bmr_formula not in BMR_FORMULAS:
            raise ConfigurationError(
                f"Unknown BMR formula '{self.nutrition_bmr_formula}'",
                config_key="NUTRITION_BMR_FORMULA",
            )
        if self.nutrition_weight_loss_policy not in WEIGHT_LOSS_POLICIES:
            raise ConfigurationError(
                f"Unknown weight loss policy '{self.nutrition_weight_loss_policy}'",
                config_key="NUTRITION_WEIGHT_LOSS_POLICY",
            )
        if self.nutrition_macro_table not in MACRO_TABLES:
            raise ConfigurationError(
                f"Unknown macro table '{self.nutrition_macro_table}'",
                config_key="NUTRITION_MACRO_TABLE",
            )
        return CalculatorConfig(
            bmr_formula=self.nutrition_bmr_formula,
            weight_loss_policy=self.nutrition_weight_loss_policy,
            macro_table=self.nutrition_macro_table,
        )


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
