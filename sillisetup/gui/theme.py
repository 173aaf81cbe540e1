"""卸载对话框使用的主题与样式"""
from __future__ import annotations
from typing import Dict, Any


class Colors:
    BACKGROUND = "#17181a"
    SURFACE = "#1f2023"
    SURFACE_LIGHT = "#292b2e"
    PRIMARY = "#F0C419"
    PRIMARY_LIGHT = "#F3D04A"
    ERROR = "#dc3545"
    NEUTRAL = "#343a40"
    NEUTRAL_HOVER = "#495057"
    TEXT_PRIMARY = "#EAEAEA"
    TEXT_SECONDARY = "#B0B0B0"
    TEXT_MUTED = "#7A7A7A"
    TEXT_LIGHT = "#FFFFFF"


class Fonts:
    FAMILY = "Segoe UI"
    H1 = (FAMILY, 20, "bold")
    BODY = (FAMILY, 13)
    SMALL = (FAMILY, 12)


class Style:
    BUTTON_SECONDARY: Dict[str, Any] = dict(
        fg_color=Colors.NEUTRAL,
        hover_color=Colors.NEUTRAL_HOVER,
        text_color=Colors.TEXT_SECONDARY,
        corner_radius=10,
        font=(Fonts.FAMILY, 13),
    )
    BUTTON_DANGER: Dict[str, Any] = dict(
        fg_color=Colors.ERROR,
        hover_color="#E55061",
        text_color=Colors.TEXT_LIGHT,
        corner_radius=10,
        font=(Fonts.FAMILY, 13, "bold"),
    )
    CHECKBOX: Dict[str, Any] = dict(
        font=Fonts.BODY,
        text_color=Colors.TEXT_PRIMARY,
        fg_color=Colors.PRIMARY,
        hover_color=Colors.PRIMARY_LIGHT,
        border_color=Colors.TEXT_MUTED,
    )
