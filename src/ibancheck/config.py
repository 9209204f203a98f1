from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, List, Optional
import yaml
from pydantic import BaseModel, Field, field_validator

_COUNTRY_CODE = re.compile(r"[A-Z]{2}")

# ---- Country table additions (read once, at init time) ----
class CountrySpec(BaseModel):
    length: int = Field(gt=4, le=34)
    format: str  # layout descriptor, e.g. "U04F10"

class RegistryConfig(BaseModel):
    extra_countries: Dict[str, CountrySpec] = Field(default_factory=dict)
    exclude: List[str] = Field(default_factory=list)

    @field_validator("extra_countries")
    @classmethod
    def _upper_codes(cls, v: Dict[str, CountrySpec]) -> Dict[str, CountrySpec]:
        out = {}
        for code, spec in v.items():
            if not _COUNTRY_CODE.fullmatch(code.upper()):
                raise ValueError(f"country code must be 2 letters, got {code!r}")
            out[code.upper()] = spec
        return out

    @field_validator("exclude")
    @classmethod
    def _upper_exclude(cls, v: List[str]) -> List[str]:
        return [code.upper() for code in v]

# ---- Output (CLI display) ----
class OutputConfig(BaseModel):
    mask: bool = False        # star out the middle of IBANs in output
    printable: bool = True    # print groups of four instead of the compact code

# ---- Root config ----
class IbanCheckConfig(BaseModel):
    registry: RegistryConfig = Field(default_factory=RegistryConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

# ---- Loader ----
def load_config(path: Optional[Path]) -> IbanCheckConfig:
    if not path:
        return IbanCheckConfig()
    data = yaml.safe_load(Path(path).read_text()) or {}
    return IbanCheckConfig(**data)
