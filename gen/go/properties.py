"""
Type-directed property dispatch.

Every value kind of the document model maps to a handler below. A handler
appends zero or more statements to the code streams; kinds that have no Go
rendering in a given context are logged and skipped.
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Type

from core.names import setter_name
from core.ui_model import (
    BoolValue, Brush, CStringValue, CharValue, Color, ColorGroup, CursorShape, CursorValue,
    Date, DateTime, DoubleValue, EnumValue, FloatValue, Font, IconSet, Locale, LongLongValue,
    NumberValue, Palette, Pixmap, Point, PointF, Property, Rect, RectF, SetValue, Size, SizeF,
    SizePolicy, StringListValue, StringValue, Time, ULongLongValue, UrlValue,
)
from gen.go.resolver import GoResolver
from utils.text import go_bool, go_float, go_quote

logger = logging.getLogger(__name__)


def color_expr(c: Color) -> str:
    return f"gui.NewQColor3({c.red}, {c.green}, {c.blue}, {c.alpha})"


def scoped_token(value: str, namespace: str) -> str:
    """``Ns::Member`` or bare ``Member`` -> ``Ns__Member``."""
    if "::" in value:
        return value.replace(":", "_")
    return f"{namespace}__{value}"


class PropertyEmitter:
    def __init__(self, resolver: GoResolver) -> None:
        self.resolver = resolver
        self.streams = resolver.streams
        self._handlers: Dict[Type, Callable[[str, Property, str, str], None]] = {
            BoolValue: self._emit_bool,
            NumberValue: self._emit_integer,
            LongLongValue: self._emit_integer,
            ULongLongValue: self._emit_integer,
            FloatValue: self._emit_float,
            DoubleValue: self._emit_float,
            Color: self._emit_color,
            CStringValue: self._emit_cstring,
            CursorValue: self._emit_unsupported,
            CursorShape: self._emit_cursor_shape,
            EnumValue: self._emit_enum,
            SetValue: self._emit_set,
            Font: self._emit_font,
            Pixmap: self._emit_pixmap,
            IconSet: self._emit_icon,
            Palette: self._emit_palette,
            Point: self._emit_point,
            PointF: self._emit_pointf,
            Rect: self._emit_rect,
            RectF: self._emit_rectf,
            Size: self._emit_size,
            SizeF: self._emit_sizef,
            Locale: self._emit_locale,
            SizePolicy: self._emit_size_policy,
            StringValue: self._emit_string,
            StringListValue: self._emit_unsupported,
            Date: self._emit_date,
            Time: self._emit_time,
            DateTime: self._emit_datetime,
            CharValue: self._emit_unsupported,
            UrlValue: self._emit_unsupported,
            Brush: self._emit_brush,
        }

    # ---------- public API ----------
    def emit(self, target: str, prop: Property, arg_prefix: str = "",
             translate_target: Optional[str] = None) -> None:
        """Emit the statements applying *prop* to the Go expression *target*.

        *arg_prefix* is spliced in front of the value argument (``"0, "`` for
        column-indexed item setters). Translated strings are applied to
        *translate_target* when given, since the retranslate method cannot see
        setup-local temporaries.
        """
        handler = self._handlers.get(type(prop.value))
        if handler is None:
            logger.error("property %s of kind %s not supported", prop.name, type(prop.value).__name__)
            return
        handler(target, prop, arg_prefix, translate_target or target)

    def emit_all(self, target: str, props: List[Property]) -> None:
        for prop in props:
            self.emit(target, prop)

    def translated(self, value: StringValue) -> str:
        """``_translate(...)`` call for a translatable string."""
        return f"_translate({go_quote(self.resolver.root_var)}, {go_quote(value.value)}, {go_quote(value.comment)}, -1)"

    def icon_temp(self, icon: IconSet) -> str:
        """Rebuild the shared ``icon`` temporary from *icon* and return its name."""
        r = self.resolver
        name = r.ensure_icon_temp()
        r.request_import("gui")
        if icon.theme:
            self.streams.emit(f"{name} = gui.QIcon_FromTheme({go_quote(icon.theme)})")
            return name
        r.request_import("core")
        self.streams.emit(f"{name} = gui.NewQIcon()")
        for path, mode, state in icon.pixmaps():
            self.streams.emit(
                f"{name}.AddPixmap({self._pixmap_expr(path)}, gui.QIcon__{mode}, gui.QIcon__{state})")
        return name

    # ---------- helpers ----------
    def _set(self, target: str, prop: Property, arg_prefix: str, value: str) -> None:
        self.streams.emit(f"{target}.{setter_name(prop.name)}({arg_prefix}{value})")

    def _pixmap_expr(self, path: str) -> str:
        self.resolver.request_import("gui")
        self.resolver.request_import("core")
        return f"gui.NewQPixmap5({go_quote(path)}, \"\", core.Qt__AutoColor)"

    def _brush_expr(self, brush: Brush, context: str) -> Optional[str]:
        if brush.color is None:
            fill = "gradient" if brush.gradient is not None else "texture" if brush.texture is not None else "empty"
            logger.error("%s brush fill not supported for %s", fill, context)
            return None
        self.resolver.request_import("gui")
        self.resolver.request_import("core")
        return f"gui.NewQBrush3({color_expr(brush.color)}, core.Qt__{brush.style})"

    # ---------- scalar kinds ----------
    def _emit_bool(self, target, prop, arg_prefix, _tt) -> None:
        self._set(target, prop, arg_prefix, go_bool(prop.value.value))

    def _emit_integer(self, target, prop, arg_prefix, _tt) -> None:
        self._set(target, prop, arg_prefix, str(prop.value.value))

    def _emit_float(self, target, prop, arg_prefix, _tt) -> None:
        self._set(target, prop, arg_prefix, go_float(prop.value.value))

    def _emit_color(self, target, prop, arg_prefix, _tt) -> None:
        self.resolver.request_import("gui")
        self._set(target, prop, arg_prefix, color_expr(prop.value))

    def _emit_cstring(self, target, prop, arg_prefix, _tt) -> None:
        if prop.name != "buddy":
            logger.error("cstring property %s not supported", prop.name)
            return
        buddy = self.resolver.field(prop.value.value)
        self.streams.emit_buddy(f"{target}.{setter_name(prop.name)}({arg_prefix}{buddy})")

    def _emit_unsupported(self, _target, prop, _arg_prefix, _tt) -> None:
        logger.error("%s property %s not supported", type(prop.value).__name__, prop.name)

    def _emit_cursor_shape(self, target, prop, arg_prefix, _tt) -> None:
        self.resolver.request_import("core")
        self.resolver.request_import("gui")
        shape = scoped_token(prop.value.value, "Qt")
        self._set(target, prop, arg_prefix, f"gui.NewQCursor2(core.{shape})")

    # ---------- enum kinds ----------
    def _emit_enum(self, target, prop, arg_prefix, _tt) -> None:
        value = self.resolver.resolve_enum(prop.value.value)
        if value is None:
            return
        self._set(target, prop, arg_prefix, value)

    def _emit_set(self, target, prop, arg_prefix, _tt) -> None:
        value = self.resolver.resolve_set(prop.value.tokens)
        if value is None:
            return
        self._set(target, prop, arg_prefix, value)

    # ---------- composite kinds ----------
    def _emit_font(self, target, prop, arg_prefix, _tt) -> None:
        font: Font = prop.value
        name = self.resolver.ensure_font_temp()
        emit = self.streams.emit
        emit(f"{name} = gui.NewQFont()")
        if font.family:
            emit(f"{name}.SetFamily({go_quote(font.family)})")
        if font.point_size:
            emit(f"{name}.SetPointSize({font.point_size})")
        if font.weight:
            emit(f"{name}.SetWeight({font.weight})")
        for flag, setter in ((font.italic, "SetItalic"), (font.bold, "SetBold"),
                             (font.underline, "SetUnderline"), (font.strikeout, "SetStrikeOut"),
                             (font.kerning, "SetKerning")):
            if flag:
                emit(f"{name}.{setter}(true)")
        if font.style_strategy:
            emit(f"{name}.SetStyleStrategy(gui.{scoped_token(font.style_strategy, 'QFont')})")
        self._set(target, prop, arg_prefix, name)

    def _emit_pixmap(self, target, prop, arg_prefix, _tt) -> None:
        self._set(target, prop, arg_prefix, self._pixmap_expr(prop.value.value))

    def _emit_icon(self, target, prop, arg_prefix, _tt) -> None:
        name = self.icon_temp(prop.value)
        self._set(target, prop, arg_prefix, name)

    def _emit_palette(self, target, prop, arg_prefix, _tt) -> None:
        palette: Palette = prop.value
        r = self.resolver
        name = r.ensure_palette_temp()
        r.request_import("core")
        r.request_import("gui")
        self.streams.emit(f"{name} = gui.NewQPalette()")

        def apply_group(group_name: str, group: ColorGroup) -> None:
            for item in group.items:
                if item.is_color:
                    logger.error("Color role required for palette %s", prop.name)
                    continue
                expr = self._brush_expr(item.role.brush, f"palette role {item.role.role}")
                if expr is None:
                    continue
                brush = r.ensure_brush_temp()
                self.streams.emit(f"{brush} = {expr}")
                self.streams.emit(
                    f"{name}.SetBrush2(gui.QPalette__{group_name}, gui.QPalette__{item.role.role}, {brush})")

        for group_name, group in (("Active", palette.active), ("Inactive", palette.inactive),
                                  ("Disabled", palette.disabled)):
            if group is not None:
                apply_group(group_name, group)
        self._set(target, prop, arg_prefix, name)

    def _emit_brush(self, target, prop, arg_prefix, _tt) -> None:
        expr = self._brush_expr(prop.value, f"property {prop.name}")
        if expr is None:
            return
        name = self.resolver.ensure_brush_temp()
        self.streams.emit(f"{name} = {expr}")
        self._set(target, prop, arg_prefix, name)

    def _emit_size_policy(self, target, prop, arg_prefix, _tt) -> None:
        policy: SizePolicy = prop.value
        name = self.resolver.ensure_size_policy_temp()
        emit = self.streams.emit
        emit(f"{name} = widgets.NewQSizePolicy2("
             f"widgets.{scoped_token(policy.hsizetype, 'QSizePolicy')}, "
             f"widgets.{scoped_token(policy.vsizetype, 'QSizePolicy')}, "
             f"widgets.QSizePolicy__DefaultType)")
        emit(f"{name}.SetHorizontalStretch({policy.hor_stretch})")
        emit(f"{name}.SetVerticalStretch({policy.ver_stretch})")
        emit(f"{name}.SetHeightForWidth({target}.SizePolicy().HasHeightForWidth())")
        self._set(target, prop, arg_prefix, name)

    # ---------- geometry ----------
    def _emit_point(self, target, prop, arg_prefix, _tt) -> None:
        self.resolver.request_import("core")
        p = prop.value
        self._set(target, prop, arg_prefix, f"core.NewQPoint2({p.x}, {p.y})")

    def _emit_pointf(self, target, prop, arg_prefix, _tt) -> None:
        self.resolver.request_import("core")
        p = prop.value
        self._set(target, prop, arg_prefix, f"core.NewQPointF2({go_float(p.x)}, {go_float(p.y)})")

    def _emit_rect(self, target, prop, arg_prefix, _tt) -> None:
        self.resolver.request_import("core")
        r = prop.value
        self._set(target, prop, arg_prefix, f"core.NewQRect4({r.x}, {r.y}, {r.width}, {r.height})")

    def _emit_rectf(self, target, prop, arg_prefix, _tt) -> None:
        self.resolver.request_import("core")
        r = prop.value
        args = ", ".join(go_float(v) for v in (r.x, r.y, r.width, r.height))
        self._set(target, prop, arg_prefix, f"core.NewQRectF4({args})")

    def _emit_size(self, target, prop, arg_prefix, _tt) -> None:
        self.resolver.request_import("core")
        s = prop.value
        self._set(target, prop, arg_prefix, f"core.NewQSize2({s.width}, {s.height})")

    def _emit_sizef(self, target, prop, arg_prefix, _tt) -> None:
        self.resolver.request_import("core")
        s = prop.value
        self._set(target, prop, arg_prefix, f"core.NewQSizeF2({go_float(s.width)}, {go_float(s.height)})")

    def _emit_locale(self, target, prop, arg_prefix, _tt) -> None:
        self.resolver.request_import("core")
        loc = prop.value
        self._set(target, prop, arg_prefix,
                  f"core.NewQLocale3(core.QLocale__{loc.language}, core.QLocale__{loc.country})")

    # ---------- text ----------
    def _emit_string(self, target, prop, arg_prefix, translate_target) -> None:
        value: StringValue = prop.value
        if value.notr:
            self._set(target, prop, arg_prefix, go_quote(value.value))
            return
        self.streams.emit_translate(
            f"{translate_target}.{setter_name(prop.name)}({arg_prefix}{self.translated(value)})")

    # ---------- date / time ----------
    def _emit_date(self, target, prop, arg_prefix, _tt) -> None:
        self.resolver.request_import("core")
        d = prop.value
        self._set(target, prop, arg_prefix, f"core.NewQDate3({d.year}, {d.month}, {d.day})")

    def _emit_time(self, target, prop, arg_prefix, _tt) -> None:
        self.resolver.request_import("core")
        t = prop.value
        self._set(target, prop, arg_prefix, f"core.NewQTime3({t.hour}, {t.minute}, {t.second}, 0)")

    def _emit_datetime(self, target, prop, arg_prefix, _tt) -> None:
        self.resolver.request_import("core")
        dt = prop.value
        self._set(target, prop, arg_prefix,
                  f"core.NewQDateTime3(core.NewQDate3({dt.year}, {dt.month}, {dt.day}), "
                  f"core.NewQTime3({dt.hour}, {dt.minute}, {dt.second}, 0), core.Qt__LocalTime)")


__all__ = ["PropertyEmitter", "color_expr", "scoped_token"]
