"""BetBlock mobile app -- Kivy-based Android interface.

Reuses the core betblock modules (models, storage, accounts, goals,
dashboard) with a touch-friendly UI designed for phones.
"""

from __future__ import annotations

import io
import logging
import sys
from pathlib import Path

# Ensure the parent package is importable when running standalone on desktop
_project_root = Path(__file__).resolve().parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from kivy.app import App
from kivy.clock import Clock
from kivy.core.image import Image as CoreImage
from kivy.lang import Builder
from kivy.metrics import dp, sp
from kivy.properties import BooleanProperty
from kivy.uix.boxlayout import BoxLayout
from kivy.uix.button import Button
from kivy.uix.image import Image as KivyImage
from kivy.uix.label import Label
from kivy.uix.popup import Popup
from kivy.uix.screenmanager import Screen, ScreenManager, SlideTransition
from kivy.uix.textinput import TextInput
from kivy.uix.widget import Widget

from PIL import Image as PILImage

from betblock import accounts, dashboard, goals, progress, storage
from betblock import config as cfg
from betblock.charts import savings_projection_chart, weekly_hours_chart
from betblock.encouragement import advice_for, get_nudge, recommendation_for, weekly_message
from betblock.errors import BetBlockError, StorageError
from betblock.models import RiskTier, Trend
from betblock.validation import sanitize

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_ACCENT = (0.0, 0.639, 1.0, 1)           # #00A3FF
_TEXT = (0.878, 0.878, 0.878, 1)          # #e0e0e0
_MUTED = (0.667, 0.667, 0.667, 1)         # #AAAAAA

_RISK_COLOUR = {
    RiskTier.LOW: (0.298, 0.686, 0.314, 1),     # #4CAF50
    RiskTier.MEDIUM: (1.0, 0.596, 0.0, 1),      # #FF9800
    RiskTier.HIGH: (0.957, 0.263, 0.212, 1),    # #F44336
}

_TREND_TEXT = {
    Trend.IMPROVING: "Improving!",
    Trend.WORSENING: "Watch out!",
    Trend.STABLE: "Stable",
}


def _pil_to_kivy_image(pil_img: PILImage.Image) -> CoreImage:
    """Convert a PIL Image to a Kivy CoreImage (texture source)."""
    buf = io.BytesIO()
    pil_img.save(buf, format="png")
    buf.seek(0)
    return CoreImage(buf, ext="png")


def _make_label(text, **kw):
    """Create a self-sizing Label with text wrapping."""
    defaults = dict(
        font_size=sp(14), color=_TEXT,
        size_hint_y=None, text_size=(None, None), halign="left", valign="top",
    )
    defaults.update(kw)
    lbl = Label(text=text, **defaults)
    lbl.bind(width=lambda i, w: setattr(i, "text_size", (w - dp(8), None)))
    lbl.bind(texture_size=lambda i, ts: setattr(i, "height", ts[1] + dp(8)))
    return lbl


def _chart_widget(pil_img, height):
    core_img = _pil_to_kivy_image(pil_img)
    return KivyImage(
        texture=core_img.texture, size_hint_y=None,
        height=dp(height), allow_stretch=True, keep_ratio=True,
    )


def _show_msg(title, text):
    content = BoxLayout(orientation="vertical", padding=10, spacing=10)
    content.add_widget(Label(text=text, font_size=sp(13), color=_TEXT,
                             halign="center"))
    btn = Button(text="OK", size_hint_y=None, height=dp(44))
    popup = Popup(title=title, content=content, size_hint=(0.85, 0.35))
    btn.bind(on_release=lambda _: popup.dismiss())
    content.add_widget(btn)
    popup.open()


def _show_error(exc):
    """Report a failed operation; the app stays usable."""
    if isinstance(exc, StorageError):
        log.warning("Storage error: %s", exc)
        _show_msg("Error", "Something went wrong saving your data.\nPlease try again later.")
    else:
        _show_msg("Error", str(exc))


def _go(screen_name, direction="left"):
    sm = App.get_running_app().root
    sm.transition = SlideTransition(direction=direction)
    sm.current = screen_name


# ---------------------------------------------------------------------------
# Kivy UI definition (KV language)
# ---------------------------------------------------------------------------

KV = """
#:import get_color_from_hex kivy.utils.get_color_from_hex
#:import dp kivy.metrics.dp
#:import sp kivy.metrics.sp

# ---- Reusable styles ----

<AccentLabel@Label>:
    color: get_color_from_hex('#00A3FF')
    font_size: sp(16)
    bold: True
    size_hint_y: None
    height: dp(32)
    text_size: self.width, None
    halign: 'left'

<DarkButton@Button>:
    background_color: get_color_from_hex('#00A3FF')
    font_size: sp(14)
    size_hint_y: None
    height: dp(44)
    bold: True

<FormInput@TextInput>:
    multiline: False
    font_size: sp(14)
    size_hint_y: None
    height: dp(44)
    background_color: get_color_from_hex('#3a3a3a')
    foreground_color: get_color_from_hex('#e0e0e0')
    hint_text_color: get_color_from_hex('#aaaaaa')

# ---- Toolbar ----

<Toolbar>:
    size_hint_y: None
    height: dp(44)
    spacing: dp(2)
    padding: [dp(2), dp(2)]
    canvas.before:
        Color:
            rgba: get_color_from_hex('#0A0909')
        Rectangle:
            pos: self.pos
            size: self.size

    Button:
        text: 'Home'
        font_size: sp(12)
        bold: True
        background_color: get_color_from_hex('#00A3FF')
        on_release: root.go('home', 'right')
    Button:
        text: 'Goal'
        font_size: sp(12)
        background_color: get_color_from_hex('#3a3a3a')
        on_release: root.go('goal', 'left')
    Button:
        text: 'Hours'
        font_size: sp(12)
        background_color: get_color_from_hex('#3a3a3a')
        on_release: root.go('hours', 'left')
    Button:
        text: 'Logout'
        font_size: sp(12)
        background_color: get_color_from_hex('#553535')
        on_release: app.confirm_logout()

# ---- Login ----

<LoginScreen>:
    canvas.before:
        Color:
            rgba: get_color_from_hex('#2D2D2D')
        Rectangle:
            pos: self.pos
            size: self.size
    BoxLayout:
        orientation: 'vertical'
        padding: [dp(24), dp(48)]
        spacing: dp(10)
        Label:
            text: 'BetBlock'
            font_size: sp(32)
            bold: True
            color: get_color_from_hex('#00A3FF')
            size_hint_y: None
            height: dp(64)
        AccentLabel:
            text: 'Username:'
        FormInput:
            id: user
            hint_text: 'At least 3 characters'
            on_text: self.text = root.clean(self.text)
        AccentLabel:
            text: 'Password:'
        FormInput:
            id: password
            password: True
            on_text: self.text = root.clean(self.text)
        DarkButton:
            text: 'Logging in...' if root.busy else 'Log in'
            disabled: root.busy
            on_release: root.do_login()
        Button:
            text: "No account? Sign up"
            background_color: 0, 0, 0, 0
            color: get_color_from_hex('#00A3FF')
            size_hint_y: None
            height: dp(40)
            on_release: root.manager.current = 'register'
        Widget:

# ---- Register ----

<RegisterScreen>:
    canvas.before:
        Color:
            rgba: get_color_from_hex('#2D2D2D')
        Rectangle:
            pos: self.pos
            size: self.size
    ScrollView:
        BoxLayout:
            orientation: 'vertical'
            padding: [dp(24), dp(32)]
            spacing: dp(10)
            size_hint_y: None
            height: self.minimum_height
            Label:
                text: 'Create Account'
                font_size: sp(24)
                bold: True
                color: get_color_from_hex('#e0e0e0')
                size_hint_y: None
                height: dp(48)
            AccentLabel:
                text: 'Username:'
            FormInput:
                id: user
                hint_text: 'At least 3 characters'
                on_text: self.text = root.clean(self.text)[:30]
            AccentLabel:
                text: 'Password:'
            FormInput:
                id: password
                password: True
                hint_text: 'At least 4 characters'
                on_text: self.text = root.clean(self.text)[:50]
            AccentLabel:
                text: 'Confirm password:'
            FormInput:
                id: confirm
                password: True
                hint_text: 'Type the password again'
                on_text: self.text = root.clean(self.text)[:50]
            DarkButton:
                text: 'Creating account...' if root.busy else 'Sign up'
                disabled: root.busy
                on_release: root.do_register()
            Button:
                text: 'Already have an account? Back to login'
                background_color: 0, 0, 0, 0
                color: get_color_from_hex('#00A3FF')
                size_hint_y: None
                height: dp(40)
                on_release: root.manager.current = 'login'
            Label:
                text: 'Your data never leaves this device.'
                font_size: sp(12)
                color: get_color_from_hex('#aaaaaa')
                size_hint_y: None
                height: dp(32)

# ---- Scrollable content screens ----

<ScrollScreen>:
    BoxLayout:
        orientation: 'vertical'
        canvas.before:
            Color:
                rgba: get_color_from_hex('#2D2D2D')
            Rectangle:
                pos: self.pos
                size: self.size
        Toolbar:
        ScrollView:
            BoxLayout:
                id: content
                orientation: 'vertical'
                padding: [dp(12), dp(8)]
                spacing: dp(6)
                size_hint_y: None
                height: self.minimum_height
"""


class Toolbar(BoxLayout):
    """Top navigation bar present on every logged-in screen."""

    def go(self, screen_name, direction):
        _go(screen_name, direction)


# ---------------------------------------------------------------------------
# Screens
# ---------------------------------------------------------------------------


class _FormScreen(Screen):
    busy = BooleanProperty(False)

    @staticmethod
    def clean(text):
        return sanitize(text)

    @property
    def conn(self):
        return App.get_running_app().conn


class LoginScreen(_FormScreen):
    """Login form; skipped when a session already exists."""

    def on_enter(self):
        try:
            if accounts.is_authenticated(self.conn):
                Clock.schedule_once(lambda dt: _go("home", "left"), 0)
        except StorageError as exc:
            _show_error(exc)

    def do_login(self):
        self.busy = True
        try:
            session = accounts.login(self.conn, self.ids.user.text, self.ids.password.text)
        except BetBlockError as exc:
            _show_error(exc)
            return
        finally:
            self.busy = False
        self.ids.password.text = ""
        _show_msg("Welcome", f"Welcome, {session.username}!")
        _go("home", "left")


class RegisterScreen(_FormScreen):
    """Sign-up form; logs the new account in on success."""

    def do_register(self):
        self.busy = True
        try:
            user = accounts.register(
                self.conn, self.ids.user.text,
                self.ids.password.text, self.ids.confirm.text,
            )
        except BetBlockError as exc:
            _show_error(exc)
            return
        finally:
            self.busy = False
        for field in ("user", "password", "confirm"):
            self.ids[field].text = ""
        _show_msg("Account created", f"Welcome, {user.username}!\nYour account is ready.")
        _go("home", "left")


class ScrollScreen(Screen):
    """A screen with a toolbar and a scrollable content area (#content)."""

    @property
    def conn(self):
        return App.get_running_app().conn

    def on_enter(self):
        c = self.ids.content
        c.clear_widgets()
        try:
            self.build_content(c)
        except BetBlockError as exc:
            _show_error(exc)

    def build_content(self, c):
        raise NotImplementedError


class HomeScreen(ScrollScreen):
    """Dashboard: risk profile, this week's hours, blocker and savings."""

    def build_content(self, c):
        summary = dashboard.get_home_summary(self.conn, cfg.load_config())

        c.add_widget(_make_label(
            f"Hello, {summary.username or 'there'}!", font_size=sp(20), bold=True, color=_ACCENT,
        ))
        c.add_widget(_make_label(get_nudge(), font_size=sp(12), color=_MUTED))

        c.add_widget(Widget(size_hint_y=None, height=dp(8)))
        c.add_widget(_make_label("Risk profile", font_size=sp(16), bold=True, color=_ACCENT))
        c.add_widget(_make_label(
            summary.risk.value.title(), font_size=sp(22), bold=True,
            color=_RISK_COLOUR[summary.risk],
        ))
        c.add_widget(_make_label(advice_for(summary.risk), font_size=sp(13)))

        c.add_widget(Widget(size_hint_y=None, height=dp(8)))
        c.add_widget(_make_label("Hours gambling this week", font_size=sp(16), bold=True, color=_ACCENT))
        c.add_widget(_make_label(f"{summary.weekly_hours:g}h", font_size=sp(28), bold=True))
        c.add_widget(_make_label(weekly_message(summary.weekly_hours), font_size=sp(13)))
        details = Button(text="See details", size_hint_y=None, height=dp(40),
                         background_color=(0.23, 0.23, 0.23, 1))
        details.bind(on_release=lambda _: _go("hours", "left"))
        c.add_widget(details)

        c.add_widget(Widget(size_hint_y=None, height=dp(8)))
        c.add_widget(_make_label("App blocker", font_size=sp(16), bold=True, color=_ACCENT))
        c.add_widget(_make_label(
            "ON - gambling apps blocked" if summary.blocked else "OFF",
            font_size=sp(14), color=_RISK_COLOUR[RiskTier.LOW] if summary.blocked else _MUTED,
        ))

        c.add_widget(Widget(size_hint_y=None, height=dp(8)))
        c.add_widget(_make_label(
            f"If you save {summary.monthly_savings:,.0f} a month",
            font_size=sp(16), bold=True, color=_ACCENT,
        ))
        for months, saved in summary.milestones.items():
            c.add_widget(_make_label(f"  -- {months} months: {saved:,.2f}", font_size=sp(13)))
        c.add_widget(_make_label(
            f"{summary.progress_percent}% of a {summary.goal.name}",
            font_size=sp(15), bold=True, color=_RISK_COLOUR[RiskTier.LOW],
        ))
        c.add_widget(_make_label(
            f"Reached in about {progress.format_eta(summary.eta_years, summary.eta_months)}",
            font_size=sp(12), color=_MUTED,
        ))

        try:
            c.add_widget(_chart_widget(savings_projection_chart(
                summary.monthly_savings, summary.goal.amount, summary.projection_months,
            ), 200))
        except Exception:
            log.debug("Savings chart failed", exc_info=True)

        change = Button(text="Change goal", size_hint_y=None, height=dp(44),
                        background_color=_ACCENT)
        change.bind(on_release=lambda _: _go("goal", "left"))
        c.add_widget(change)
        c.add_widget(Widget(size_hint_y=None, height=dp(20)))


class GoalScreen(ScrollScreen):
    """Goal editor: set, replace or delete the savings goal."""

    def build_content(self, c):
        current = goals.get_goal(self.conn)
        monthly = cfg.load_config().monthly_savings

        c.add_widget(_make_label("Savings goal", font_size=sp(20), bold=True, color=_ACCENT))
        if current is not None:
            years, months = progress.eta_to_goal(current.amount, monthly)
            c.add_widget(_make_label(
                f"Current: {current.name} -- {current.amount:,.2f}\n"
                f"About {progress.format_eta(years, months)} at {monthly:,.0f} a month",
                font_size=sp(13), color=_MUTED,
            ))

        c.add_widget(_make_label("What are you saving for?", font_size=sp(14), bold=True))
        self._name = TextInput(
            text=current.name if current else "", hint_text="Car, House, Trip...",
            multiline=False, size_hint_y=None, height=dp(44), font_size=sp(14),
            background_color=(0.23, 0.23, 0.23, 1), foreground_color=_TEXT,
        )
        self._name.bind(text=lambda inst, t: setattr(inst, "text", sanitize(t)[:50]))
        c.add_widget(self._name)

        c.add_widget(_make_label("Amount", font_size=sp(14), bold=True))
        self._amount = TextInput(
            text=f"{current.amount:g}".replace(".", ",") if current else "",
            hint_text="e.g. 4.500", multiline=False, size_hint_y=None, height=dp(44),
            font_size=sp(14), input_filter=lambda s, undo: "".join(ch for ch in s if ch in "0123456789.,"),
            background_color=(0.23, 0.23, 0.23, 1), foreground_color=_TEXT,
        )
        c.add_widget(self._amount)

        save = Button(text="Activate goal", size_hint_y=None, height=dp(44),
                      background_color=_ACCENT, bold=True)
        save.bind(on_release=lambda _: self._save())
        c.add_widget(save)

        if current is not None:
            delete = Button(text="Delete goal", size_hint_y=None, height=dp(44),
                            background_color=(0.55, 0.35, 0.35, 1))
            delete.bind(on_release=lambda _: self._confirm_delete())
            c.add_widget(delete)
        c.add_widget(Widget(size_hint_y=None, height=dp(20)))

    def _save(self):
        try:
            goal = goals.set_goal(self.conn, self._name.text, self._amount.text)
        except BetBlockError as exc:
            _show_error(exc)
            return
        monthly = cfg.load_config().monthly_savings
        years, months = progress.eta_to_goal(goal.amount, monthly)
        _show_msg(
            "Goal set!",
            f"{goal.name}: {goal.amount:,.2f}\n\nSaving {monthly:,.0f} a month you will "
            f"get there in about {progress.format_eta(years, months)}!",
        )
        _go("home", "right")

    def _confirm_delete(self):
        content = BoxLayout(orientation="vertical", padding=10, spacing=10)
        content.add_widget(Label(text="Delete your current goal?", font_size=sp(14), color=_TEXT))
        row = BoxLayout(size_hint_y=None, height=dp(44), spacing=8)
        popup = Popup(title="Delete goal", content=content, size_hint=(0.85, 0.3))

        def on_delete(_):
            popup.dismiss()
            try:
                goals.delete_goal(self.conn)
            except BetBlockError as exc:
                _show_error(exc)
                return
            self.on_enter()

        cancel_btn = Button(text="Cancel")
        cancel_btn.bind(on_release=lambda _: popup.dismiss())
        delete_btn = Button(text="Delete", background_color=(0.55, 0.35, 0.35, 1))
        delete_btn.bind(on_release=on_delete)
        row.add_widget(cancel_btn)
        row.add_widget(delete_btn)
        content.add_widget(row)
        popup.open()


class HoursScreen(ScrollScreen):
    """Weekly hours chart, statistics, blocker toggle and advice."""

    def build_content(self, c):
        summary = dashboard.get_hours_summary(self.conn)

        c.add_widget(_make_label("Hours gambling", font_size=sp(20), bold=True, color=_ACCENT))
        if not summary.has_data:
            c.add_widget(_make_label("Showing example data.", font_size=sp(12), color=_MUTED))
        try:
            c.add_widget(_chart_widget(weekly_hours_chart(summary.hours), 220))
        except Exception:
            log.debug("Hours chart failed", exc_info=True)

        c.add_widget(_make_label(
            f"Total: {summary.total:g}h    Average: {summary.average:.1f}h    "
            f"This week: {summary.hours.week4:g}h",
            font_size=sp(13),
        ))
        c.add_widget(_make_label(
            f"Trend: {_TREND_TEXT[summary.trend]}", font_size=sp(15), bold=True,
            color=_RISK_COLOUR[RiskTier.LOW] if summary.trend == Trend.IMPROVING else _TEXT,
        ))

        c.add_widget(Widget(size_hint_y=None, height=dp(8)))
        c.add_widget(_make_label("App blocker", font_size=sp(16), bold=True, color=_ACCENT))
        c.add_widget(_make_label("Control access to gambling apps", font_size=sp(12), color=_MUTED))
        toggle = Button(
            text="ON - tap to unblock" if summary.blocked else "OFF - tap to block gambling apps",
            size_hint_y=None, height=dp(56), bold=True,
            background_color=_RISK_COLOUR[RiskTier.HIGH] if summary.blocked else (0.23, 0.23, 0.23, 1),
        )
        toggle.bind(on_release=lambda _: self._toggle())
        c.add_widget(toggle)

        c.add_widget(Widget(size_hint_y=None, height=dp(8)))
        title, text = recommendation_for(summary.risk)
        c.add_widget(_make_label(title, font_size=sp(15), bold=True, color=_RISK_COLOUR[summary.risk]))
        c.add_widget(_make_label(text, font_size=sp(13), color=_MUTED))
        c.add_widget(Widget(size_hint_y=None, height=dp(20)))

    def _toggle(self):
        try:
            blocked = goals.toggle_block(self.conn)
        except BetBlockError as exc:
            _show_error(exc)
            return
        if blocked:
            _show_msg("Apps blocked", "Gambling apps have been blocked on your device.")
        else:
            _show_msg("Block removed", "Gambling apps have been unblocked.")
        self.on_enter()


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------


class BetBlockApp(App):
    """Kivy application entry point."""

    title = "BetBlock"

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.conn = None

    def build(self):
        self.conn = storage.get_connection()
        storage.seed_demo_data(self.conn)
        Builder.load_string(KV)
        sm = ScreenManager()
        sm.add_widget(LoginScreen(name="login"))
        sm.add_widget(RegisterScreen(name="register"))
        sm.add_widget(HomeScreen(name="home"))
        sm.add_widget(GoalScreen(name="goal"))
        sm.add_widget(HoursScreen(name="hours"))
        return sm

    def confirm_logout(self):
        content = BoxLayout(orientation="vertical", padding=10, spacing=10)
        content.add_widget(Label(text="Do you really want to log out?", font_size=sp(14), color=_TEXT))
        row = BoxLayout(size_hint_y=None, height=dp(44), spacing=8)
        popup = Popup(title="Logout", content=content, size_hint=(0.85, 0.3))

        def on_logout(_):
            popup.dismiss()
            try:
                accounts.logout(self.conn)
            except BetBlockError as exc:
                _show_error(exc)
                return
            _go("login", "right")

        cancel_btn = Button(text="Cancel")
        cancel_btn.bind(on_release=lambda _: popup.dismiss())
        out_btn = Button(text="Log out", background_color=(0.55, 0.35, 0.35, 1))
        out_btn.bind(on_release=on_logout)
        row.add_widget(cancel_btn)
        row.add_widget(out_btn)
        content.add_widget(row)
        popup.open()

    def on_stop(self):
        if self.conn:
            self.conn.close()


if __name__ == "__main__":
    BetBlockApp().run()
