"""Site configuration for Postcard.

This module loads and validates the site settings read once per build from
postcard.yaml. The result is an immutable SiteConfig record; anything wrong
with the file is reported as a ConfigError naming the offending key, so a
build can stop before any page is rendered.

Key names follow the theme schema (camelCase). Snake-case spellings are
accepted as aliases so the file can be written either way.

Key items:
- SiteConfig: Frozen dataclass holding the validated settings.
- ConfigError: Raised for missing or invalid keys.
- parse_config: Validate a raw mapping.
- load_config: Read and validate postcard.yaml.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from .html_utils import is_external_url, join_root_url, prefix_path

CONFIG_FILENAME = "postcard.yaml"

REQUIRED_KEYS = ("title", "author", "primaryColor", "postsPerPage")

DEFAULT_CONFIG: dict[str, Any] = {
    "description": "",
    "showHeaderImage": False,
    "showShareButtons": True,
    "social": {},
    "pathPrefix": "/",
    "siteUrl": "",
}

# schema key -> SiteConfig attribute
_FIELDS = {
    "title": "title",
    "author": "author",
    "description": "description",
    "primaryColor": "primary_color",
    "showHeaderImage": "show_header_image",
    "showShareButtons": "show_share_buttons",
    "postsPerPage": "posts_per_page",
    "social": "social",
    "pathPrefix": "path_prefix",
    "siteUrl": "site_url",
}
_ALIASES = {attr: key for key, attr in _FIELDS.items() if attr != key}

# CSS named colors, plus transparent and currentcolor.
CSS_NAMED_COLORS = frozenset(
    """
    aliceblue antiquewhite aqua aquamarine azure beige bisque black
    blanchedalmond blue blueviolet brown burlywood cadetblue chartreuse
    chocolate coral cornflowerblue cornsilk crimson cyan darkblue darkcyan
    darkgoldenrod darkgray darkgreen darkgrey darkkhaki darkmagenta
    darkolivegreen darkorange darkorchid darkred darksalmon darkseagreen
    darkslateblue darkslategray darkslategrey darkturquoise darkviolet
    deeppink deepskyblue dimgray dimgrey dodgerblue firebrick floralwhite
    forestgreen fuchsia gainsboro ghostwhite gold goldenrod gray green
    greenyellow grey honeydew hotpink indianred indigo ivory khaki lavender
    lavenderblush lawngreen lemonchiffon lightblue lightcoral lightcyan
    lightgoldenrodyellow lightgray lightgreen lightgrey lightpink lightsalmon
    lightseagreen lightskyblue lightslategray lightslategrey lightsteelblue
    lightyellow lime limegreen linen magenta maroon mediumaquamarine
    mediumblue mediumorchid mediumpurple mediumseagreen mediumslateblue
    mediumspringgreen mediumturquoise mediumvioletred midnightblue mintcream
    mistyrose moccasin navajowhite navy oldlace olive olivedrab orange
    orangered orchid palegoldenrod palegreen paleturquoise palevioletred
    papayawhip peachpuff peru pink plum powderblue purple rebeccapurple red
    rosybrown royalblue saddlebrown salmon sandybrown seagreen seashell
    sienna silver skyblue slateblue slategray slategrey snow springgreen
    steelblue tan teal thistle tomato turquoise violet wheat white
    whitesmoke yellow yellowgreen transparent currentcolor
    """.split()
)

_COLOR_RE = re.compile(
    r"^(?:#(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})"
    r"|(?:rgb|hsl)a?\([^()]*\))$"
)


class ConfigError(Exception):
    """Invalid or incomplete site configuration.

    Attributes:
        key: Schema key that failed validation, or None for file-level errors.
        message: Human-readable error message.
    """

    def __init__(self, message: str, key: str | None = None):
        self.key = key
        self.message = message
        super().__init__(message)


@dataclass(frozen=True)
class SiteConfig:
    """Validated site settings.

    Attributes:
        title: Site title.
        author: Site author.
        primary_color: CSS color used by the theme.
        posts_per_page: Number of post summaries per listing page.
        description: Short site description.
        show_header_image: Whether the theme shows a header image.
        show_share_buttons: Whether posts show share buttons.
        social: Read-only mapping of platform name to profile URL.
        path_prefix: Path the site is served under, such as "/" or "/blog".
        site_url: Public URL of the site, without the path prefix.
        extra: Read-only mapping of keys outside the schema.
    """

    title: str
    author: str
    primary_color: str
    posts_per_page: int
    description: str = ""
    show_header_image: bool = False
    show_share_buttons: bool = True
    social: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    path_prefix: str = "/"
    site_url: str = ""
    extra: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def url_for(self, path: str) -> str:
        """Return a site path with the path prefix applied."""
        return prefix_path(self.path_prefix, path)

    def absolute_url(self, path: str) -> str:
        """Return the public URL for a site path.

        Falls back to the prefixed path when no site URL is configured.
        """
        if is_external_url(path):
            return path
        return join_root_url(self.site_url, self.url_for(path))

    def as_dict(self) -> dict[str, Any]:
        """Return the settings keyed by schema name, for template contexts."""
        data = {key: getattr(self, attr) for key, attr in _FIELDS.items()}
        data["social"] = dict(self.social)
        data.update(self.extra)
        return data


def _normalize_keys(raw: Mapping[str, Any]) -> dict[str, Any]:
    normalized: dict[str, Any] = {}
    for key, value in raw.items():
        if not isinstance(key, str):
            raise ConfigError(f"Config keys must be strings, got {key!r}")
        name = _ALIASES.get(key, key)
        if name in normalized:
            raise ConfigError(
                f"Config key '{name}' is given more than once (as '{key}')", name
            )
        normalized[name] = value
    return normalized


def _require_text(values: dict[str, Any], key: str, allow_blank: bool = True) -> str:
    value = values[key]
    if not isinstance(value, str):
        raise ConfigError(
            f"Config key '{key}' must be a string, got {type(value).__name__}", key
        )
    if not allow_blank and not value.strip():
        raise ConfigError(f"Config key '{key}' must not be empty", key)
    return value


def _is_css_color(value: str) -> bool:
    return value.lower() in CSS_NAMED_COLORS or bool(_COLOR_RE.match(value))


def _require_flag(values: dict[str, Any], key: str) -> bool:
    value = values[key]
    if not isinstance(value, bool):
        raise ConfigError(f"Config key '{key}' must be true or false", key)
    return value


def parse_config(raw: Any) -> SiteConfig:
    """Validate a raw configuration mapping.

    Args:
        raw: Mapping as loaded from YAML.

    Returns:
        SiteConfig with defaults applied for optional keys.

    Raises:
        ConfigError: If a required key is missing or a value is invalid.
    """
    if not isinstance(raw, Mapping):
        raise ConfigError("Configuration must be a mapping of keys to values")

    values = DEFAULT_CONFIG.copy()
    values.update(_normalize_keys(raw))
    for key, default in DEFAULT_CONFIG.items():
        if values[key] is None:
            values[key] = default

    for key in REQUIRED_KEYS:
        if values.get(key) is None:
            raise ConfigError(f"Missing required config key '{key}'", key)

    title = _require_text(values, "title", allow_blank=False)
    author = _require_text(values, "author", allow_blank=False)
    description = _require_text(values, "description")
    site_url = _require_text(values, "siteUrl")

    color = values["primaryColor"]
    if not isinstance(color, str) or not _is_css_color(color.strip()):
        raise ConfigError(
            f"Config key 'primaryColor' must be a CSS color, got {color!r}",
            "primaryColor",
        )

    per_page = values["postsPerPage"]
    if isinstance(per_page, bool) or not isinstance(per_page, int) or per_page < 1:
        raise ConfigError(
            f"Config key 'postsPerPage' must be a positive integer, got {per_page!r}",
            "postsPerPage",
        )

    social = values["social"]
    if not isinstance(social, Mapping) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in social.items()
    ):
        raise ConfigError(
            "Config key 'social' must map platform names to URLs", "social"
        )

    path_prefix = _require_text(values, "pathPrefix")
    if not path_prefix.startswith("/"):
        raise ConfigError(
            f"Config key 'pathPrefix' must start with '/', got {path_prefix!r}",
            "pathPrefix",
        )

    extra = {k: v for k, v in values.items() if k not in _FIELDS}

    return SiteConfig(
        title=title,
        author=author,
        primary_color=color.strip(),
        posts_per_page=per_page,
        description=description,
        show_header_image=_require_flag(values, "showHeaderImage"),
        show_share_buttons=_require_flag(values, "showShareButtons"),
        social=MappingProxyType(dict(social)),
        path_prefix=path_prefix,
        site_url=site_url,
        extra=MappingProxyType(extra),
    )


def load_config(project_root: Path, path: Path | None = None) -> SiteConfig:
    """Load site configuration from postcard.yaml.

    Args:
        project_root: Root directory of the project.
        path: Optional explicit config file, overriding the default location.

    Returns:
        Validated SiteConfig.

    Raises:
        ConfigError: If the file is missing, unreadable YAML, or invalid.
    """
    config_path = path or project_root / CONFIG_FILENAME
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")
    try:
        with open(config_path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Could not parse {config_path}: {exc}") from exc
    return parse_config(loaded if loaded is not None else {})
