from pydantic import BaseModel, Field

DEFAULT_API_PREFIX = "/api/v1/dynamic"


class StoreSettings(BaseModel):
    api_prefix: str = DEFAULT_API_PREFIX
    timeout_seconds: float = Field(default=30.0, gt=0)


class WorkflowSettings(BaseModel):
    published_slug: str = "published"
    default_assigned_by: str = "system"


class CmsSettings(BaseModel):
    store: StoreSettings = Field(default_factory=StoreSettings)
    workflow: WorkflowSettings = Field(default_factory=WorkflowSettings)


class StoreConfig(BaseModel):
    """Connection details for the remote store."""

    base_url: str
    api_key: str
    api_prefix: str = DEFAULT_API_PREFIX
    timeout_seconds: float = Field(default=30.0, gt=0)

    @property
    def root_url(self) -> str:
        """Base URL joined with the API prefix, no trailing slash."""
        prefix = "/" + self.api_prefix.strip("/") if self.api_prefix.strip("/") else ""
        return self.base_url.rstrip("/") + prefix
