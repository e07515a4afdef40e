"""Title screen state: logo, stage selection and icon layout."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

STAGE_ICON_COUNT = 3
STICK_THRESHOLD = 0.5
ICON_BASE_SIZE = 330.0
ICON_SELECTED_SIZE = 450.0
ICON_SPACING = 170.0

_ICON_RECTS: tuple[tuple[int, int, int, int], ...] = (
    (1134, 546, 1700 - 1134, 1092 - 546),
    (0, 546, 567 - 0, 1092 - 546),
    (567, 546, 1134 - 567, 1092 - 546),
)


class TitleState(Enum):
    LOGO = "logo"
    STAGE_SELECT = "stage_select"


@dataclass(frozen=True)
class TitleInput:
    """Input sampled for one frame."""

    pad_connected: bool = False
    pad_b: bool = False
    pad_lx: float = 0.0
    enter_pressed: bool = False
    enter_triggered: bool = False
    a_pressed: bool = False
    d_pressed: bool = False


@dataclass(frozen=True)
class IconPlacement:
    """Where one stage icon is drawn and which part of the atlas it shows."""

    x: float
    y: float
    size: float
    source: tuple[int, int, int, int]
    angle: float
    selected: bool


class TitleMenu:
    """Title screen logic; keyboard input is ignored while a pad is connected."""

    def __init__(self) -> None:
        self.state = TitleState.LOGO
        self.selected_stage = 0
        self.finished = False
        self.angle = 0.0
        self._prev_pad_b = False
        self._prev_stick_left = False
        self._prev_stick_right = False
        self._wait_release = False
        self._prev_a = False
        self._prev_d = False

    def _edge(self, attr: str, current: bool) -> bool:
        triggered = current and not getattr(self, attr)
        setattr(self, attr, current)
        return triggered

    def update(self, elapsed_time: float, inputs: TitleInput) -> None:
        """Advance one frame."""
        self.angle += float(elapsed_time)
        connected = inputs.pad_connected

        pad_b_trigger = connected and self._edge("_prev_pad_b", inputs.pad_b)
        stick_left = connected and inputs.pad_lx < -STICK_THRESHOLD
        stick_right = connected and inputs.pad_lx > STICK_THRESHOLD
        left_trigger = connected and self._edge("_prev_stick_left", stick_left)
        right_trigger = connected and self._edge("_prev_stick_right", stick_right)

        allow_keyboard = not connected
        enter_trigger = allow_keyboard and inputs.enter_triggered

        if self.state is TitleState.LOGO:
            if pad_b_trigger or enter_trigger:
                self.state = TitleState.STAGE_SELECT
                self._wait_release = True
            return

        enter_held = allow_keyboard and inputs.enter_pressed
        b_held = connected and inputs.pad_b
        if self._wait_release:
            if not enter_held and not b_held:
                self._wait_release = False
            return

        a_held = allow_keyboard and inputs.a_pressed
        d_held = allow_keyboard and inputs.d_pressed
        a_trigger = a_held and not self._prev_a
        d_trigger = d_held and not self._prev_d

        if left_trigger or a_trigger:
            self.selected_stage = (self.selected_stage + STAGE_ICON_COUNT - 1) % STAGE_ICON_COUNT
        elif right_trigger or d_trigger:
            self.selected_stage = (self.selected_stage + 1) % STAGE_ICON_COUNT

        self._prev_a = a_held
        self._prev_d = d_held

        if pad_b_trigger or enter_trigger:
            self.finished = True

    def prompt(self) -> str:
        """Text shown under the title for the current state."""
        return "Press B or Enter" if self.state is TitleState.LOGO else "Select Stage!!"

    def icon_layout(self, screen_width: float, screen_height: float) -> list[IconPlacement]:
        """Placement of every stage icon, the selected one drawn larger."""
        base_total = ICON_BASE_SIZE * STAGE_ICON_COUNT + ICON_SPACING * (STAGE_ICON_COUNT - 1)
        start_x = (screen_width - base_total) * 0.5
        base_y = screen_height * 0.6
        placements = []
        for index, rect in enumerate(_ICON_RECTS):
            selected = index == self.selected_stage
            size = ICON_SELECTED_SIZE if selected else ICON_BASE_SIZE
            offset_x = 40.0 if selected else 0.0
            x = (
                start_x
                + index * (ICON_BASE_SIZE + ICON_SPACING)
                + (ICON_BASE_SIZE - size) * 0.5
                + 140.0
                + offset_x
            )
            y = base_y + (ICON_BASE_SIZE - size) * 0.5 - 40.0
            placements.append(IconPlacement(x, y, size, rect, self.angle, selected))
        return placements

    def logo_position(
        self,
        screen_width: float,
        screen_height: float,
        logo_width: float,
        logo_height: float,
    ) -> tuple[float, float]:
        """Top-left corner of the logo, centred and nudged down."""
        return (
            (screen_width - logo_width) * 0.5,
            (screen_height - logo_height) * 0.5 + 50.0,
        )