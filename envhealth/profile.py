"""User health profile passed explicitly to anything that personalizes output."""

from pydantic import BaseModel, ConfigDict, Field


class HealthProfile(BaseModel):
    """Conditions that change which alerts and advice a user sees."""
    model_config = ConfigDict(populate_by_name=True)

    has_respiratory_conditions: bool = Field(default=False, alias="hasRespiratoryConditions")
    has_allergies: bool = Field(default=False, alias="hasAllergies")


class EnvironmentalSensitivities(BaseModel):
    """Self-reported sensitivities on a 0 (none) to 5 (severe) scale."""
    model_config = ConfigDict(populate_by_name=True)

    uv_sensitivity: int = Field(default=0, ge=0, le=5, alias="uvSensitivity")


HIGH_UV_SENSITIVITY = 4


class UserContext(BaseModel):
    """Profile of the user the dashboard is rendered for."""
    model_config = ConfigDict(populate_by_name=True)

    health_profile: HealthProfile = Field(default_factory=HealthProfile, alias="healthProfile")
    environmental_sensitivities: EnvironmentalSensitivities = Field(
        default_factory=EnvironmentalSensitivities, alias="environmentalSensitivities"
    )

    @property
    def has_respiratory_conditions(self) -> bool:
        return self.health_profile.has_respiratory_conditions

    @property
    def has_allergies(self) -> bool:
        return self.health_profile.has_allergies

    @property
    def high_uv_sensitivity(self) -> bool:
        return self.environmental_sensitivities.uv_sensitivity >= HIGH_UV_SENSITIVITY
