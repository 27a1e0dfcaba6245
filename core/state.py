"""Pipeline data models shared across all stages."""

from __future__ import annotations

from dataclasses import dataclass, field

from config.design import DEFAULT_COLORS
from config.stacks import INTERACTION_LEVELS, NAV_TYPES, STACKS
from core.errors import ValidationError

STAGE_ORDER = ("analyzing", "scaffold", "styling", "complete")


def _field(data, *keys):
    """First non-empty value among ``keys`` (snake_case, then camelCase)."""
    for key in keys:
        value = data.get(key)
        if value not in (None, "", [], {}):
            return value
    return None


def _text(data, *keys, default=""):
    value = _field(data, *keys)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValidationError(f"{keys[0]} must be a string")
    return value


def _items(data, *keys):
    value = _field(data, *keys)
    if value is None:
        return ()
    if not isinstance(value, (list, tuple)):
        raise ValidationError(f"{keys[0]} must be a list")
    return value


@dataclass(frozen=True)
class ColorPalette:
    id: str = "default"
    name: str = "Default"
    colors: tuple[str, ...] = tuple(DEFAULT_COLORS)

    @classmethod
    def from_dict(cls, data):
        if not data:
            return cls()
        if not isinstance(data, dict):
            raise ValidationError("color_palette must be an object")
        colors = tuple(str(c) for c in (_items(data, "colors") or DEFAULT_COLORS))[:5]
        return cls(
            id=str(data.get("id", "custom")),
            name=str(data.get("name", data.get("id", "Custom"))),
            colors=colors,
        )


@dataclass(frozen=True)
class PageInfo:
    name: str
    role: str = ""

    @property
    def slug(self) -> str:
        return "-".join(self.name.lower().split())


@dataclass(frozen=True)
class ImageInput:
    data: str               # base64 payload, no data: URL prefix
    mime_type: str = "image/png"

    @classmethod
    def from_base64(cls, data, mime_type=None):
        if "," in data and data.lstrip().startswith("data:"):
            header, data = data.split(",", 1)
            if not mime_type and ";" in header:
                mime_type = header[len("data:"):].split(";", 1)[0]
        return cls(data=data.strip(), mime_type=mime_type or "image/png")


@dataclass(frozen=True)
class GenerationConfig:
    tech_stack: str
    color_palette: ColorPalette = field(default_factory=ColorPalette)
    design_system: str = "minimal"
    interaction_level: str = "micro"
    features: frozenset[str] = frozenset()
    page_type: str = "landing"
    nav_type: str = "topnav"
    detected_sections: tuple[str, ...] = ()
    pages: tuple[PageInfo, ...] = ()
    page_flow_instructions: str = ""
    text_prompt: str = ""

    @classmethod
    def from_dict(cls, data) -> GenerationConfig:
        """Build a config from a JSON body, rejecting unknown enum values."""
        if not isinstance(data, dict):
            raise ValidationError("Config must be an object")

        stack = _text(data, "tech_stack", "techStack")
        if not stack:
            raise ValidationError("Tech stack required")
        if stack not in STACKS:
            raise ValidationError(f"Unknown tech stack: {stack}")

        level = _text(data, "interaction_level", "interactionLevel", default="micro")
        if level not in INTERACTION_LEVELS:
            raise ValidationError(f"Unknown interaction level: {level}")

        nav = _text(data, "nav_type", "navType", default="topnav")
        if nav not in NAV_TYPES:
            nav = "topnav"

        pages = tuple(
            PageInfo(name=str(p.get("name", "")).strip(), role=str(p.get("role", "")))
            for p in _items(data, "pages")
            if isinstance(p, dict) and str(p.get("name", "")).strip()
        )
        sections = _items(data, "detected_sections", "detectedSections")

        return cls(
            tech_stack=stack,
            color_palette=ColorPalette.from_dict(_field(data, "color_palette", "colorPalette")),
            design_system=_text(data, "design_system", "designSystem", default="minimal"),
            interaction_level=level,
            features=frozenset(str(f) for f in _items(data, "features")),
            page_type=_text(data, "page_type", "pageType", default="landing"),
            nav_type=nav,
            detected_sections=tuple(str(s).lower() for s in sections),
            pages=pages,
            page_flow_instructions=_text(data, "page_flow_instructions", "pageFlowInstructions"),
            text_prompt=_text(data, "text_prompt", "textPrompt").strip(),
        )


@dataclass(frozen=True)
class LayoutAnalysis:
    sections: tuple[str, ...]
    nav_type: str
    page_type: str


DEFAULT_LAYOUT = LayoutAnalysis(
    sections=("hero", "content", "footer"), nav_type="topnav", page_type="landing",
)


@dataclass(frozen=True)
class GeneratedFile:
    path: str           # relative path e.g. "src/App.tsx"
    content: str
    language: str       # "html", "typescript", "vue", "svelte", ...

    def to_dict(self):
        return {"path": self.path, "content": self.content, "language": self.language}


@dataclass(frozen=True)
class PipelineStage:
    stage: str                          # analyzing|scaffold|styling|complete
    progress: int                       # 0-100, never decreases within a run
    code: str | None = None
    files: tuple[GeneratedFile, ...] | None = None
    preview_html: str | None = None
    error: str | None = None
    error_kind: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.stage == "complete" and (self.progress >= 100 or self.error is not None)

    def to_dict(self):
        data = {"stage": self.stage, "progress": self.progress}
        if self.code is not None:
            data["code"] = self.code
        if self.files is not None:
            data["files"] = [f.to_dict() for f in self.files]
        if self.preview_html is not None:
            data["preview_html"] = self.preview_html
        if self.error is not None:
            data["error"] = self.error
            data["error_kind"] = self.error_kind
        return data
