"""Build information model for the Loki buildinfo endpoint."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class BuildInfo(BaseModel):
    """Version metadata reported by a Loki server.

    Attributes:
        version: Release version.
        revision: Source revision the binary was built from.
        branch: Source branch.
        build_user: User and host that produced the build.
        build_date: Build timestamp as reported by the server.
        go_version: Go toolchain version of the server binary.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    version: str
    revision: str
    branch: str
    build_user: str = Field(alias="buildUser")
    build_date: str = Field(alias="buildDate")
    go_version: str = Field(alias="goVersion")
