"""Field contracts for the seven entity kinds stored in the catalog.

Each kind names its collection key in the document, its required and optional
fields, and (for components and apis) the summary projection used by list
views. Everything else in the package reads these tables instead of branching
on the kind.
"""

from __future__ import annotations

from dataclasses import dataclass

from uicatalog.errors import UnknownEntityKindError

HTTP_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH")


@dataclass(frozen=True)
class FieldSpec:
    name: str
    json_type: str  # "string" | "boolean" | "object"
    description: str
    required: bool = True
    choices: tuple[str, ...] = ()


@dataclass(frozen=True)
class EntityKind:
    key: str  # collection key and HTTP path segment, e.g. "style-guide"
    singular: str  # tool suffix for single-record tools, e.g. "style_guide"
    label: str  # human name, e.g. "Style guide pattern"
    fields: tuple[FieldSpec, ...]
    summary: tuple[str, ...] | None = None
    aliases: tuple[str, ...] = ()  # collection keys used by older documents

    @property
    def plural(self) -> str:
        """Tool suffix for the collection-level tool, e.g. get_style_guide."""
        return self.key.replace("-", "_")

    @property
    def required_fields(self) -> list[str]:
        return [f.name for f in self.fields if f.required]

    @property
    def optional_fields(self) -> list[str]:
        return [f.name for f in self.fields if not f.required]

    def project(self, record: dict) -> dict:
        """Reduce a record to its list-view fields, or return it whole."""
        if self.summary is None:
            return record
        return {name: record[name] for name in self.summary if name in record}

    def validate(self, record: dict) -> list[str]:
        """Return the problems that keep `record` from being stored."""
        problems = []
        for spec in self.fields:
            value = record.get(spec.name)
            if spec.required and (value is None or value == ""):
                problems.append(f"missing required field '{spec.name}'")
            elif spec.choices and value is not None and value not in spec.choices:
                problems.append(
                    f"'{spec.name}' must be one of {', '.join(spec.choices)} (got {value!r})"
                )
        return problems


ENTITY_KINDS: dict[str, EntityKind] = {
    kind.key: kind
    for kind in (
        EntityKind(
            key="components",
            singular="component",
            label="Component",
            fields=(
                FieldSpec("name", "string", "Component name"),
                FieldSpec("description", "string", "Component description"),
                FieldSpec("filePath", "string", "Path to component file"),
                FieldSpec("usageExample", "string", "Usage example code", required=False),
            ),
            summary=("id", "name", "description"),
        ),
        EntityKind(
            key="apis",
            singular="api",
            label="API",
            fields=(
                FieldSpec("name", "string", "API name"),
                FieldSpec("endpoint", "string", "API endpoint path"),
                FieldSpec("method", "string", "HTTP method", choices=HTTP_METHODS),
                FieldSpec("description", "string", "API description"),
                FieldSpec("requestBody", "object", "Request body structure", required=False),
                FieldSpec("responseBody", "object", "Response body structure", required=False),
            ),
            summary=("id", "name", "description", "endpoint", "method"),
        ),
        EntityKind(
            key="environment",
            singular="environment",
            label="Environment variable",
            fields=(
                FieldSpec("name", "string", "Environment variable name"),
                FieldSpec("description", "string", "Variable description"),
                FieldSpec("isPublic", "boolean", "Whether the variable is exposed to the browser"),
            ),
            aliases=("environmentVars",),
        ),
        EntityKind(
            key="style-guide",
            singular="style_guide",
            label="Style guide pattern",
            fields=(
                FieldSpec("element", "string", "UI element name"),
                FieldSpec("description", "string", "Pattern description"),
                FieldSpec("className", "string", "CSS class name"),
                FieldSpec("usageExample", "string", "Usage example", required=False),
            ),
            aliases=("styling",),
        ),
        EntityKind(
            key="state",
            singular="state",
            label="State management",
            fields=(
                FieldSpec("library", "string", "State management library"),
                FieldSpec("storeDirectory", "string", "Directory holding the stores"),
                FieldSpec("usagePattern", "string", "How stores are created and consumed"),
            ),
            aliases=("stateManagement",),
        ),
        EntityKind(
            key="hooks",
            singular="hook",
            label="Hook",
            fields=(
                FieldSpec("name", "string", "Hook name"),
                FieldSpec("filePath", "string", "Path to hook file"),
                FieldSpec("description", "string", "Hook description"),
                FieldSpec("usage", "string", "Usage example"),
            ),
            aliases=("customHooks",),
        ),
        EntityKind(
            key="conventions",
            singular="convention",
            label="Convention",
            fields=(
                FieldSpec("rule", "string", "Convention or lint rule"),
                FieldSpec("description", "string", "What the rule requires and why"),
            ),
            aliases=("codeConventions",),
        ),
    )
}

COLLECTION_KEYS = tuple(ENTITY_KINDS)


def get_kind(key: str) -> EntityKind:
    """Look up an entity kind by its collection key."""
    try:
        return ENTITY_KINDS[key]
    except KeyError:
        raise UnknownEntityKindError(key) from None


def default_document() -> dict[str, list[dict]]:
    """A fresh document: every collection present and empty."""
    return {key: [] for key in COLLECTION_KEYS}
