import streamlit as st

from chart_renderer import replay
from config import ConfigError, build_codec, build_slot, from_env
from controller import CooperativeScheduler, HabitTracker
from habits import DAYS, HABITS, StreakColor
from overview import week_frame, week_heatmap
from plotly_surface import PlotlySurface
from week_store import WeekStore

# -------------------------------
# SET PAGE CONFIGURATION
# -------------------------------
st.set_page_config(
    page_title="Pulse",
    layout="wide",
    initial_sidebar_state="collapsed"
)

# -------------------------------
# BUILD THE TRACKER (once per session)
# -------------------------------
if "tracker" not in st.session_state:
    try:
        config = from_env()
        store = WeekStore(build_slot(config), build_codec(config))
    except ConfigError as e:
        st.error(str(e))
        st.stop()

    st.session_state.warnings = []
    st.session_state.chart_commands = []

    def remember_chart(commands):
        st.session_state.chart_commands = commands

    tracker = HabitTracker(
        store,
        width=config.chart_width,
        height=config.chart_height,
        margin=config.chart_margin,
        on_render=remember_chart,
        on_warning=st.session_state.warnings.append,
    )
    scheduler = CooperativeScheduler(tracker.clock)
    tracker.start(scheduler)
    st.session_state.tracker = tracker
    st.session_state.scheduler = scheduler

tracker = st.session_state.tracker
scheduler = st.session_state.scheduler


def on_day_change():
    tracker.on_day_selected(st.session_state.day_select)


# -------------------------------
# PERSISTENCE WARNINGS
# -------------------------------
while st.session_state.warnings:
    st.warning(st.session_state.warnings.pop(0))

st.title("Pulse Daily Habit Streaks")

tab_tracker, tab_overview = st.tabs(["Habit Tracker 📆", "Week Overview 📊"])

# =====================================================
# TAB: TRACKER
# =====================================================
with tab_tracker:
    col_day, col_timer = st.columns([1, 1])
    with col_day:
        st.selectbox(
            "Day",
            DAYS,
            index=tracker.store.current_day - 1,
            format_func=lambda d: f"Day {d}",
            key="day_select",
            on_change=on_day_change,
        )

    with col_timer:
        @st.fragment(run_every=1)
        def countdown_panel():
            scheduler.run_pending()
            st.markdown(f"**Time left until reset:** `{tracker.countdown_text}`")
            if tracker.countdown.last_reset is not None and st.session_state.get("seen_reset") != tracker.countdown.last_reset:
                st.session_state.seen_reset = tracker.countdown.last_reset
                st.rerun()

        countdown_panel()

    habit_cols = st.columns(len(HABITS))
    for i, display in enumerate(tracker.habit_displays()):
        with habit_cols[i]:
            st.markdown(f"**{display.title}**")
            label = f":green[{display.glyph}]" if display.glyph_color == StreakColor.GREEN.hex else display.glyph
            if st.button(label, key=f"habit_btn_{display.habit}"):
                tracker.on_habit_button(i)
                st.rerun()
            st.markdown(
                f"<span style='color:{display.color}'>{display.text}</span>",
                unsafe_allow_html=True
            )

    surface = replay(st.session_state.chart_commands, PlotlySurface(tracker.width, tracker.height))
    st.plotly_chart(surface.figure(), use_container_width=False, key="streak_chart")

# =====================================================
# TAB: WEEK OVERVIEW
# =====================================================
with tab_overview:
    week = tracker.store.snapshot()
    st.dataframe(week_frame(week), use_container_width=True)
    st.plotly_chart(week_heatmap(week), use_container_width=True, key="week_heatmap")
