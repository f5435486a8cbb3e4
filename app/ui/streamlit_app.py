"""Microbench viewer: run the reduce comparison and browse saved runs."""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import streamlit as st
import pandas as pd
import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from microbench.artifacts import save_results
from microbench.errors import OperationPanicked
from microbench.experiment_config import RunSettings
from microbench.report import format_table, results_to_dataframe
from app.ui.run_loader import load_run_dataframe, run_rows_from_disk
from workloads.cases import build_sum_runner


def _bar_chart(df: pd.DataFrame, title: str):
    fig, ax = plt.subplots(figsize=(6, 3))
    x = np.arange(len(df))
    ax.bar(x, df["mean"], yerr=df["mean_error"], capsize=4, color="#4c72b0")
    ax.set_xticks(x)
    ax.set_xticklabels(df["benchmark"])
    unit = df["unit"].iloc[0] if len(df) else ""
    ax.set_ylabel(unit)
    ax.set_title(title)
    fig.tight_layout()
    return fig


st.set_page_config(page_title="Microbench", layout="wide")

if "last_records" not in st.session_state:
    st.session_state.last_records = None

DATA_DIR = ROOT / "data" / "runs"
DATA_DIR.mkdir(parents=True, exist_ok=True)

# ---------- Sidebar: run settings ----------
with st.sidebar:
    st.header("Run settings")
    n = st.number_input("Problem size n", min_value=0, value=1000, step=100)
    min_duration_s = st.number_input("Min batch duration (s)", min_value=0.001, value=0.1, step=0.01, format="%.3f")
    trials = st.slider("Trials", 1, 50, 10)
    max_exp = st.slider("Iteration ceiling (2^k)", 4, 30, 20)
    unit = st.selectbox("Unit", ["s/op", "ms/op", "us/op", "ns/op"], index=1)
    save = st.checkbox("Save run to disk", value=True)
    run_clicked = st.button("Run")

st.title("sum vs sumOpt")
st.caption("Curried reducer applied per step vs reducer adapted once and called with both arguments.")

if run_clicked:
    settings = RunSettings(n=int(n), min_duration_s=float(min_duration_s), trials=int(trials),
                           max_iterations=2 ** int(max_exp), unit=unit)
    config = settings.to_run_config()
    with st.spinner("Measuring..."):
        try:
            records = build_sum_runner(settings.n).run_all(config, out=False)
        except OperationPanicked as e:
            st.error(str(e))
            records = None
    if records is not None:
        st.session_state.last_records = records
        if save:
            paths = save_results(records, config, str(DATA_DIR), extra={"n": settings.n})
            st.success(f"Saved to {paths['manifest']}")

if st.session_state.last_records:
    records = st.session_state.last_records
    st.subheader("Last run")
    st.code(format_table(records), language="text")
    df = results_to_dataframe(records)
    if len(df) == 2 and df["mean"].iloc[1] > 0:
        st.metric("Speedup (sum / sumOpt)", f"{df['mean'].iloc[0] / df['mean'].iloc[1]:.2f}x")
    st.pyplot(_bar_chart(df, "Mean per op (± error)"))
    if any(r.low_confidence for r in records):
        st.warning("Some cases hit the iteration ceiling before the batch duration threshold (LowConfidence).")

# ---------- Saved runs ----------
st.subheader("Saved runs")
rows = run_rows_from_disk(str(DATA_DIR))
if not rows:
    st.info("No saved runs yet.")
else:
    st.dataframe(pd.DataFrame(rows), use_container_width=True)
    run_id = st.selectbox("Run", [r["run_id"] for r in rows])
    df_run = load_run_dataframe(str(DATA_DIR), run_id)
    if df_run is not None:
        st.dataframe(df_run, use_container_width=True)
        st.pyplot(_bar_chart(df_run, f"Run {run_id}"))
