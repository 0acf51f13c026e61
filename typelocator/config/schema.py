# typelocator/config/schema.py
"""Configuration schema for type discovery."""

from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from typelocator.names import split_list


class LocatorConfig(BaseModel):
    """
    Configuration for HierarchyRegistry and its resolver.

    Example YAML:
        namespaces:
          myapp.exporters.Exporter: myapp.exporters,thirdparty.exporters
        blacklist:
          myapp.exporters.Exporter:
            - .*Legacy.*
            - .*Test.*
        only_default_constructor: true
    """

    namespaces: Dict[str, List[str]] = Field(
        default_factory=dict,
        description="Contract -> namespaces to search",
    )
    blacklist: Dict[str, List[str]] = Field(
        default_factory=dict,
        description="Contract -> regexes of class names to exclude",
    )
    only_default_constructor: bool = Field(
        default=False,
        description="Drop classes that cannot be called without arguments",
    )
    only_serializable: bool = Field(
        default=False,
        description="Drop classes that do not pickle by reference",
    )
    search_path: Optional[List[str]] = Field(
        default=None,
        description="Search path entries. None = sys.path",
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("namespaces", "blacklist", mode="before")
    @classmethod
    def split_values(cls, v: Any) -> Any:
        """Accept comma-separated strings as well as lists."""
        if v is None:
            return {}
        if not isinstance(v, dict):
            return v
        return {str(key): split_list(value) for key, value in v.items()}

    @field_validator("search_path", mode="before")
    @classmethod
    def split_search_path(cls, v: Any) -> Any:
        """A string is split like PYTHONPATH."""
        if isinstance(v, str):
            return [part for part in v.split(os.pathsep) if part.strip()]
        return v
