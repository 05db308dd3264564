"""Visual themes for the embeddable player."""

from pydantic import BaseModel


class EmbedTheme(BaseModel):
    """Palette and fonts injected into the player stylesheet."""

    name: str
    primary: str
    primary_light: str
    primary_lighter: str
    primary_dark: str
    primary_rgb: str
    text: str = "#1f2937"
    text_secondary: str = "#4b5563"
    muted: str = "#6b7280"
    muted_bg: str = "#f9fafb"
    border: str = "#e5e7eb"
    page_background: str
    font_family: str = '"Inter", -apple-system, BlinkMacSystemFont, "Segoe UI", sans-serif'
    mono_font_family: str = '"Roboto Mono", monospace'
    fonts_url: str | None = (
        "https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700"
        "&family=Roboto+Mono:wght@400;600&display=swap"
    )


MIST = EmbedTheme(
    name="mist",
    primary="#9EBACF",
    primary_light="#B8D0E3",
    primary_lighter="#D0E0ED",
    primary_dark="#7A9AB2",
    primary_rgb="158, 186, 207",
    page_background="linear-gradient(135deg, #f0f4f8 0%, #e8f0f7 100%)",
)

CLASSIC = EmbedTheme(
    name="classic",
    primary="#667eea",
    primary_light="#8a9af0",
    primary_lighter="#c3cbf7",
    primary_dark="#764ba2",
    primary_rgb="102, 126, 234",
    page_background="linear-gradient(135deg, #667eea 0%, #764ba2 100%)",
    font_family="-apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif",
    mono_font_family="ui-monospace, Menlo, monospace",
    fonts_url=None,
)

THEMES: dict[str, EmbedTheme] = {theme.name: theme for theme in (MIST, CLASSIC)}


def get_theme(name: str | None, default: str = MIST.name) -> EmbedTheme:
    """Look up a theme by name, falling back to the default."""
    if name and name.lower() in THEMES:
        return THEMES[name.lower()]
    return THEMES.get(default, MIST)
