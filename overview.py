import pandas as pd
import plotly.graph_objects as go

from habits import DAYS, HABITS, HABIT_TITLES


def week_frame(week: dict) -> pd.DataFrame:
    """Habits as rows, day slots as columns, plus a Total column."""
    df = pd.DataFrame(
        [[week[day][habit] for day in DAYS] for habit in HABITS],
        index=[HABIT_TITLES[habit] for habit in HABITS],
        columns=[f"Day {day}" for day in DAYS],
    )
    df.index.name = "Habit"
    df["Total"] = df.sum(axis=1)
    return df


def week_heatmap(week: dict) -> go.Figure:
    df = week_frame(week).drop(columns="Total")
    fig = go.Figure(data=go.Heatmap(
        z=df.values.tolist(),
        x=list(df.columns),
        y=list(df.index),
        text=df.values.tolist(),
        texttemplate="%{text}",
        colorscale=[
            [0.0, "#eaeaea"],
            [0.5, "#ff9800"],
            [1.0, "#4caf50"]
        ],
        zmin=0,
        zmax=10,
        showscale=False,
        xgap=3,
        ygap=3
    ))
    fig.update_layout(
        xaxis=dict(showgrid=False),
        yaxis=dict(showgrid=False, autorange="reversed"),
        template="plotly_white"
    )
    return fig
