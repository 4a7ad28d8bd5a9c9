"""Service log template model.

Templates follow the managed-notifications JSON layout:

    {
      "severity": "Warning",
      "service_name": "SREManualAction",
      "summary": "Action required: review cluster alerts",
      "description": "Your cluster ...",
      "internal_only": false,
      "doc_references": ["https://docs.example.com/alerts"],
      "_tags": ["t_alerts"]
    }

`_tags` is local bookkeeping and is never sent to OCM. Keys the model does not
know about are kept and sent verbatim.
"""

from __future__ import annotations

import json
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from servicelogger.errors import TemplateError

Severity = Literal["Debug", "Info", "Warning", "Error", "Fatal"]


class Template(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    severity: Severity
    service_name: str
    summary: str
    description: str
    log_type: Optional[str] = None
    internal_only: bool = False
    event_stream_id: Optional[str] = None
    doc_references: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list, alias="_tags", exclude=True)

    @classmethod
    def from_json(cls, raw: bytes | str) -> "Template":
        """Parse a template from raw JSON input.

        Raises:
            TemplateError: input is empty, not JSON, or misses required fields.
        """
        if not raw or not raw.strip():
            raise TemplateError("no template on stdin")
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise TemplateError(f"invalid template JSON: {e}") from e
        if not isinstance(data, dict):
            raise TemplateError("template must be a JSON object")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise TemplateError(f"invalid template: {e}") from e

    def to_markdown(self) -> str:
        """Human-readable markdown for operator review."""
        lines = [f"# {self.summary}", "", self.description, ""]
        lines.append(f"- **Severity**: {self.severity}")
        lines.append(f"- **Service**: {self.service_name}")
        if self.log_type:
            lines.append(f"- **Type**: {self.log_type}")
        lines.append(f"- **Internal only**: {'yes' if self.internal_only else 'no'}")
        if self.doc_references:
            lines.extend(["", "## References", ""])
            lines.extend(f"- {ref}" for ref in self.doc_references)
        return "\n".join(lines)

    def to_payload(self, cluster_id: str) -> dict[str, Any]:
        """Request body for delivering this template to one cluster."""
        payload = self.model_dump(exclude_none=True)
        payload["cluster_id"] = cluster_id
        return payload

    def __str__(self) -> str:
        return self.to_markdown()
