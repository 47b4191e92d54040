"""Pydantic models for the CEP weather service."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

# Fixed offset; the API contract is celsius + 273, not 273.15.
KELVIN_OFFSET = 273


# ---------------------------------------------------------------------------
# Domain
# ---------------------------------------------------------------------------


class LocationInfo(BaseModel):
    """Address resolved from a postal code."""

    model_config = ConfigDict(frozen=True)

    cep: str
    state: str
    city: str
    neighborhood: str
    street: str


class TemperatureReading(BaseModel):
    """Current temperature in three units, serialized as temp_K/temp_C/temp_F."""

    model_config = ConfigDict(frozen=True)

    kelvin: float = Field(serialization_alias="temp_K")
    celsius: float = Field(serialization_alias="temp_C")
    fahrenheit: float = Field(serialization_alias="temp_F")

    @classmethod
    def from_celsius(cls, celsius: float, fahrenheit: float) -> TemperatureReading:
        return cls(celsius=celsius, fahrenheit=fahrenheit, kelvin=celsius + KELVIN_OFFSET)


class ErrorKind(str, enum.Enum):
    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    INTERNAL_FAILURE = "internal_failure"


@dataclass(frozen=True)
class ErrorOutcome:
    """A request that ended without a reading."""

    kind: ErrorKind
    message: str


# ---------------------------------------------------------------------------
# Upstream wire shapes
# ---------------------------------------------------------------------------


class ViaCepResponse(BaseModel):
    """ViaCEP ``/ws/{cep}/json/`` body.

    Unknown codes come back as 200 with only ``{"erro": true}`` (older
    deployments send the string ``"true"``, which pydantic coerces).
    """

    model_config = ConfigDict(extra="ignore")

    cep: str = ""
    logradouro: str = ""
    complemento: str = ""
    unidade: str = ""
    bairro: str = ""
    localidade: str = ""
    uf: str = ""
    ibge: str = ""
    gia: str = ""
    ddd: str = ""
    siafi: str = ""
    erro: bool = False


class CurrentConditions(BaseModel):
    model_config = ConfigDict(extra="ignore")

    temp_c: float = 0.0
    temp_f: float = 0.0


class WeatherApiResponse(BaseModel):
    """WeatherAPI ``/v1/current.json`` body (only the fields we use)."""

    model_config = ConfigDict(extra="ignore")

    current: CurrentConditions = Field(default_factory=CurrentConditions)
