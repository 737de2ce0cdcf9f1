from dataclasses import dataclass

import flet as ft


@dataclass(frozen=True)
class Palette:
    primary: str
    on_primary: str
    secondary: str
    surface: str
    surface_variant: str
    on_surface_variant: str
    error: str


# Slate surfaces, green accent.
DARK = Palette(
    primary="#22c55e",  # green-500
    on_primary="#0f172a",
    secondary="#4ade80",
    surface="#0f172a",  # slate-900
    surface_variant="#1e293b",  # slate-800, cards
    on_surface_variant="#94a3b8",  # slate-400, dates and hints
    error="#f87171",
)

LIGHT = Palette(
    primary="#16a34a",
    on_primary="#ffffff",
    secondary="#15803d",
    surface="#f8fafc",
    surface_variant="#ffffff",
    on_surface_variant="#64748b",
    error="#dc2626",
)


class AppTheme:
    """Flet themes for the blog. Dark is the default mode."""

    font_family = "Inter"

    @classmethod
    def build(cls, palette: Palette) -> ft.Theme:
        return ft.Theme(
            color_scheme=ft.ColorScheme(
                primary=palette.primary,
                on_primary=palette.on_primary,
                secondary=palette.secondary,
                surface=palette.surface,
                surface_container_highest=palette.surface_variant,
                on_surface_variant=palette.on_surface_variant,
                error=palette.error,
            ),
            font_family=cls.font_family,
            use_material3=True,
        )

    @classmethod
    def dark_theme(cls) -> ft.Theme:
        return cls.build(DARK)

    @classmethod
    def light_theme(cls) -> ft.Theme:
        return cls.build(LIGHT)
