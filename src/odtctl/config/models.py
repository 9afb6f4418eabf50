"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, odtctl.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_BODY = "This is a new ODT document created by odtctl."


# --- odtctl.toml sections ---


class DocumentConfig(BaseModel):
    """[document] section."""

    model_config = {"frozen": True}

    default_body: str = DEFAULT_BODY
    generator: str = "odtctl"
    language: str = "en"
    country: str = "US"
    include_styles: bool = True
    include_meta: bool = True
    include_settings: bool = True


class LauncherConfig(BaseModel):
    """[launcher] section.

    ``commands`` replaces the platform table; each entry is an argv list
    where ``{path}`` marks the document path.
    """

    model_config = {"frozen": True}

    enabled: bool = True
    commands: list[list[str]] = Field(default_factory=list)


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True


class OdtConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    document: DocumentConfig = Field(default_factory=DocumentConfig)
    launcher: LauncherConfig = Field(default_factory=LauncherConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
