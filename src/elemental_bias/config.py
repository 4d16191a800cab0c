"""Runtime configuration for elemental bias resolution."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from elemental_bias.resolver import BiasParameters


class Settings(BaseSettings):
    """Environment-driven runtime settings."""

    model_config = SettingsConfigDict(env_prefix="ELEMENTAL_BIAS_", env_file=".env", extra="ignore")

    app_name: str = "elemental-bias"
    log_level: str = "INFO"
    hot_fire_bias: float = Field(default=60.0, ge=0.0, le=100.0, description="Fire chance (%) in hot biomes.")
    cold_frost_bias: float = Field(default=60.0, ge=0.0, le=100.0, description="Frost chance (%) in cold biomes.")
    forest_nature_bias: float = Field(default=60.0, ge=0.0, le=100.0, description="Nature chance (%) in forests.")
    thunderstorm_thunder_bias: float = Field(
        default=80.0,
        ge=0.0,
        le=100.0,
        description="Thunder chance (%) during thunderstorms.",
    )
    hot_temperature_threshold: float = 0.95
    cold_temperature_threshold: float = 0.05
    bias_config_path: str | None = Field(
        default="config/elemental_bias.json",
        description="JSON file holding custom biome bias lines; in-memory, with CLI edits refused, when empty.",
    )
    custom_biome_attribute_bias: list[str] = Field(
        default_factory=list,
        description="Initial '<biome>:<element|all>,<weight>' lines for the in-memory store.",
    )

    def bias_parameters(self) -> BiasParameters:
        return BiasParameters(
            hot_fire_bias=self.hot_fire_bias,
            cold_frost_bias=self.cold_frost_bias,
            forest_nature_bias=self.forest_nature_bias,
            thunderstorm_thunder_bias=self.thunderstorm_thunder_bias,
        )


settings = Settings()
