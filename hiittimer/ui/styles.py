"""QSS stylesheet and phase colours for HIIT Timer."""

from __future__ import annotations

from ..timer.engine import Phase, TimerState

# ── background per phase ─────────────────────────────────────────────────

PHASE_COLORS: dict[Phase, str] = {
    Phase.WORK: "#1E63D6",   # blue
    Phase.REST: "#2E9E4F",   # green
}

COMPLETE_COLOR = "#2E9E4F"


def background_for(state: TimerState, phase: Phase) -> str:
    """Window background for the given engine state."""
    if state == TimerState.COMPLETE:
        return COMPLETE_COLOR
    return PHASE_COLORS[phase]


def build_stylesheet(background: str) -> str:
    """Full-window QSS: coloured background, white text and controls."""
    return f"""
QWidget#root {{
    background-color: {background};
}}
QLabel {{
    color: #FFFFFF;
    background: transparent;
}}
QLabel#phaseLabel {{
    font-size: 32px;
    font-weight: 700;
}}
QLabel#timeLabel {{
    font-size: 24px;
    font-weight: 600;
}}
QLabel#completeLabel {{
    font-size: 32px;
    font-weight: 700;
}}
QLabel#sliderLabel {{
    font-size: 14px;
}}
QSlider::groove:horizontal {{
    height: 8px;
    border-radius: 4px;
    background: rgba(255, 255, 255, 0.35);
}}
QSlider::handle:horizontal {{
    background: #FFFFFF;
    width: 22px;
    margin: -8px 0;
    border-radius: 11px;
}}
QSlider::sub-page:horizontal {{
    background: #FFFFFF;
    border-radius: 4px;
}}
QSlider:disabled {{
    opacity: 0.5;
}}
QSlider::handle:horizontal:disabled {{
    background: rgba(255, 255, 255, 0.5);
}}
QProgressBar#phaseProgress {{
    border: none;
    border-radius: 4px;
    background: rgba(255, 255, 255, 0.35);
}}
QProgressBar#phaseProgress::chunk {{
    background: #FFFFFF;
    border-radius: 4px;
}}
QPushButton {{
    color: #FFFFFF;
    background: transparent;
    border: 3px solid #FFFFFF;
    border-radius: 32px;
    min-width: 64px;
    min-height: 64px;
    font-size: 15px;
    font-weight: 700;
}}
QPushButton:pressed {{
    background: rgba(255, 255, 255, 0.2);
}}
"""
