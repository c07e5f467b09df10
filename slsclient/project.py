"""Creating, reading, listing, updating and deleting projects."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, ClassVar, Mapping, Optional

from .common import (
    LOG_JSON,
    LOG_REQUEST_ID,
    HeaderValue,
    Request,
    header_str,
    parse_json_response,
)
from .errors import JsonDecodeError, check_required

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


def _to_json(payload: dict[str, Any]) -> bytes:
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def _drop_none(payload: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in payload.items() if value is not None}


class _Fields:
    """Typed access to the fields of a decoded JSON object."""

    def __init__(self, payload: Any, request_id: Optional[str]) -> None:
        if not isinstance(payload, dict):
            raise JsonDecodeError("expected a JSON object", request_id)
        self._payload = payload
        self._request_id = request_id

    def _get(self, name: str, required: bool) -> Any:
        value = self._payload.get(name)
        if value is None and required:
            raise JsonDecodeError(f"missing field `{name}`", self._request_id)
        return value

    def _fail(self, name: str, expected: str) -> JsonDecodeError:
        return JsonDecodeError(
            f"invalid type for field `{name}`, expected {expected}", self._request_id
        )

    def text(self, name: str, required: bool = True) -> Optional[str]:
        value = self._get(name, required)
        if value is not None and not isinstance(value, str):
            raise self._fail(name, "a string")
        return value

    def flag(self, name: str, required: bool = True) -> Optional[bool]:
        value = self._get(name, required)
        if value is not None and not isinstance(value, bool):
            raise self._fail(name, "a boolean")
        return value

    def number(self, name: str, required: bool = True) -> Optional[int]:
        value = self._get(name, required)
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, int):
            raise self._fail(name, "an integer")
        if not _I32_MIN <= value <= _I32_MAX:
            raise self._fail(name, "a 32-bit integer")
        return value

    def items(self, name: str) -> list[Any]:
        value = self._get(name, True)
        if not isinstance(value, list):
            raise self._fail(name, "a sequence")
        return value


# ---------------------------------------------------------------- create


@dataclass
class CreateProjectRequest(Request):
    """Creates a new project; the body is JSON."""

    HTTP_METHOD: ClassVar[str] = "POST"
    CONTENT_TYPE: ClassVar[Optional[str]] = LOG_JSON

    project_name: str
    description: str
    resource_group_id: Optional[str] = None
    data_redundancy_type: Optional[str] = None
    recycle_bin_enabled: Optional[bool] = None

    @property
    def project(self) -> Optional[str]:
        return None

    @property
    def path(self) -> str:
        return "/"

    def body(self) -> bytes:
        return _to_json(
            _drop_none(
                {
                    "projectName": self.project_name,
                    "description": self.description,
                    "resourceGroupId": self.resource_group_id,
                    "dataRedundancyType": self.data_redundancy_type,
                    "recycleBinEnabled": self.recycle_bin_enabled,
                }
            )
        )


class CreateProjectRequestBuilder:
    """Collects the parameters of a create-project request."""

    def __init__(self, project_name: str) -> None:
        self._project_name = project_name
        self._description: Optional[str] = None
        self._resource_group_id: Optional[str] = None
        self._data_redundancy_type: Optional[str] = None
        self._recycle_bin_enabled: Optional[bool] = None

    def description(self, description: str) -> "CreateProjectRequestBuilder":
        """Required: the project description."""
        self._description = description
        return self

    def resource_group_id(self, resource_group_id: str) -> "CreateProjectRequestBuilder":
        """Optional: the resource group to create the project in."""
        self._resource_group_id = resource_group_id
        return self

    def data_redundancy_type(
        self, data_redundancy_type: str
    ) -> "CreateProjectRequestBuilder":
        """Optional: "LRS" (local) or "ZRS" (zone) redundant storage."""
        self._data_redundancy_type = data_redundancy_type
        return self

    def recycle_bin_enabled(self, enabled: bool) -> "CreateProjectRequestBuilder":
        """Optional: whether the recycle bin is enabled."""
        self._recycle_bin_enabled = enabled
        return self

    def build(self) -> CreateProjectRequest:
        check_required(("description", self._description))
        assert self._description is not None
        return CreateProjectRequest(
            project_name=self._project_name,
            description=self._description,
            resource_group_id=self._resource_group_id,
            data_redundancy_type=self._data_redundancy_type,
            recycle_bin_enabled=self._recycle_bin_enabled,
        )


# ---------------------------------------------------------------- delete


@dataclass
class DeleteProjectRequest(Request):
    """Deletes a project and everything in it."""

    HTTP_METHOD: ClassVar[str] = "DELETE"

    project_name: str

    @property
    def project(self) -> Optional[str]:
        return self.project_name

    @property
    def path(self) -> str:
        return "/"


class DeleteProjectRequestBuilder:
    """Builds a delete-project request."""

    def __init__(self, project_name: str) -> None:
        self._project_name = project_name

    def build(self) -> DeleteProjectRequest:
        return DeleteProjectRequest(project_name=self._project_name)


# ---------------------------------------------------------------- get


@dataclass
class GetProjectRequest(Request):
    """Reads the details of a project."""

    HTTP_METHOD: ClassVar[str] = "GET"

    project_name: str

    @property
    def project(self) -> Optional[str]:
        return self.project_name

    @property
    def path(self) -> str:
        return "/"


class GetProjectRequestBuilder:
    """Builds a get-project request."""

    def __init__(self, project_name: str) -> None:
        self._project_name = project_name

    def build(self) -> GetProjectRequest:
        return GetProjectRequest(project_name=self._project_name)


@dataclass(frozen=True)
class GetProjectResponse:
    """Details of a project."""

    project_name: str
    status: str
    owner: str
    description: str
    create_time: str
    last_modify_time: str
    data_redundancy_type: str
    region: Optional[str] = None
    location: Optional[str] = None
    resource_group_id: Optional[str] = None
    transfer_acceleration: Optional[str] = None
    recycle_bin_enabled: Optional[bool] = None
    deletion_protection: Optional[bool] = None

    @classmethod
    def from_http_response(
        cls, body: bytes, headers: Optional[Mapping[str, HeaderValue]]
    ) -> "GetProjectResponse":
        """Parse the JSON body of a get-project response."""
        fields = _Fields(
            parse_json_response(body, headers), header_str(headers, LOG_REQUEST_ID)
        )
        return cls(
            project_name=fields.text("projectName"),
            status=fields.text("status"),
            owner=fields.text("owner"),
            description=fields.text("description"),
            create_time=fields.text("createTime"),
            last_modify_time=fields.text("lastModifyTime"),
            data_redundancy_type=fields.text("dataRedundancyType"),
            region=fields.text("region", required=False),
            location=fields.text("location", required=False),
            resource_group_id=fields.text("resourceGroupId", required=False),
            transfer_acceleration=fields.text("transferAcceleration", required=False),
            recycle_bin_enabled=fields.flag("recycleBinEnabled", required=False),
            deletion_protection=fields.flag("deletionProtection", required=False),
        )


# ---------------------------------------------------------------- list


@dataclass
class ListProjectsRequest(Request):
    """Lists projects page by page, optionally filtered."""

    HTTP_METHOD: ClassVar[str] = "GET"

    offset: int
    size: int
    project_name: Optional[str] = None
    description: Optional[str] = None
    resource_group_id: Optional[str] = None

    @property
    def project(self) -> Optional[str]:
        return None

    @property
    def path(self) -> str:
        return "/"

    def query_params(self) -> list[tuple[str, str]]:
        params = [("offset", str(self.offset)), ("size", str(self.size))]
        if self.project_name is not None:
            params.append(("projectName", self.project_name))
        if self.description is not None:
            params.append(("description", self.description))
        if self.resource_group_id is not None:
            params.append(("resourceGroupId", self.resource_group_id))
        return params


class ListProjectsRequestBuilder:
    """Collects the parameters of a list-projects request."""

    def __init__(self, offset: int, size: int) -> None:
        self._offset = offset
        self._size = size
        self._project_name: Optional[str] = None
        self._description: Optional[str] = None
        self._resource_group_id: Optional[str] = None

    def project_name(self, project_name: str) -> "ListProjectsRequestBuilder":
        """Filter by project name (partial match)."""
        self._project_name = project_name
        return self

    def description(self, description: str) -> "ListProjectsRequestBuilder":
        """Filter by description (partial match)."""
        self._description = description
        return self

    def resource_group_id(self, resource_group_id: str) -> "ListProjectsRequestBuilder":
        """Filter by resource group id."""
        self._resource_group_id = resource_group_id
        return self

    def build(self) -> ListProjectsRequest:
        return ListProjectsRequest(
            offset=self._offset,
            size=self._size,
            project_name=self._project_name,
            description=self._description,
            resource_group_id=self._resource_group_id,
        )


@dataclass(frozen=True)
class ListProjectsProject:
    """A project as it appears in a list response."""

    project_name: str
    status: str
    owner: str
    description: str
    region: str
    create_time: str
    last_modify_time: str
    data_redundancy_type: str
    resource_group_id: Optional[str] = None

    @classmethod
    def _from_fields(cls, fields: _Fields) -> "ListProjectsProject":
        return cls(
            project_name=fields.text("projectName"),
            status=fields.text("status"),
            owner=fields.text("owner"),
            description=fields.text("description"),
            region=fields.text("region"),
            create_time=fields.text("createTime"),
            last_modify_time=fields.text("lastModifyTime"),
            data_redundancy_type=fields.text("dataRedundancyType"),
            resource_group_id=fields.text("resourceGroupId", required=False),
        )


@dataclass(frozen=True)
class ListProjectsResponse:
    """One page of projects and the total matching the filters."""

    count: int
    total: int
    projects: list[ListProjectsProject] = field(default_factory=list)

    @classmethod
    def from_http_response(
        cls, body: bytes, headers: Optional[Mapping[str, HeaderValue]]
    ) -> "ListProjectsResponse":
        """Parse the JSON body of a list-projects response."""
        request_id = header_str(headers, LOG_REQUEST_ID)
        fields = _Fields(parse_json_response(body, headers), request_id)
        return cls(
            count=fields.number("count"),
            total=fields.number("total"),
            projects=[
                ListProjectsProject._from_fields(_Fields(item, request_id))
                for item in fields.items("projects")
            ],
        )


# ---------------------------------------------------------------- update


@dataclass
class UpdateProjectRequest(Request):
    """Updates the description or recycle-bin setting of a project."""

    HTTP_METHOD: ClassVar[str] = "PUT"
    CONTENT_TYPE: ClassVar[Optional[str]] = LOG_JSON

    project_name: str
    description: Optional[str] = None
    recycle_bin_enabled: Optional[bool] = None

    @property
    def project(self) -> Optional[str]:
        return self.project_name

    @property
    def path(self) -> str:
        return "/"

    def body(self) -> bytes:
        return _to_json(
            _drop_none(
                {
                    "description": self.description,
                    "recycleBinEnabled": self.recycle_bin_enabled,
                }
            )
        )


class UpdateProjectRequestBuilder:
    """Collects the parameters of an update-project request."""

    def __init__(self, project_name: str) -> None:
        self._project_name = project_name
        self._description: Optional[str] = None
        self._recycle_bin_enabled: Optional[bool] = None

    def description(self, description: str) -> "UpdateProjectRequestBuilder":
        """Optional: the new description."""
        self._description = description
        return self

    def recycle_bin_enabled(self, enabled: bool) -> "UpdateProjectRequestBuilder":
        """Optional: whether the recycle bin is enabled."""
        self._recycle_bin_enabled = enabled
        return self

    def build(self) -> UpdateProjectRequest:
        return UpdateProjectRequest(
            project_name=self._project_name,
            description=self._description,
            recycle_bin_enabled=self._recycle_bin_enabled,
        )