"""
Minefield Generator - Interactive Demo

Run with: streamlit run app/demo.py
"""

import random
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import streamlit as st
from typing import Any, Dict, List, Optional, Tuple

from minefield import DeductiveSolver, Field, dumps_field, generate, generate_solvable
from minefield.config import DEFAULT_MAX_ATTEMPTS, PRESETS

COLORS = {
    "0": "#cccccc",
    "1": "#0000ff",
    "2": "#008000",
    "3": "#ff0000",
    "4": "#000080",
    "5": "#800000",
    "6": "#008080",
    "7": "#000000",
    "8": "#808080",
}


def render_field_html(
    field: Field,
    state: Optional[List[Optional[int]]] = None,
    inferred: Optional[List[bool]] = None,
    highlight_cell: Optional[Tuple[int, int]] = None,
) -> str:
    """
    Render the field as an HTML table.

    Without a solver snapshot every cell is shown. With one, unopened cells
    are greyed, inferred mines are flagged and mines are shown faintly.
    """
    # Scale cell size based on field width
    if field.cols >= 30:
        cell_size, font_size = 14, "10px"
    elif field.cols >= 16:
        cell_size, font_size = 20, "13px"
    else:
        cell_size, font_size = 26, "15px"

    html = '<div style="font-family: monospace; line-height: 1.2;">'
    html += '<table style="border-collapse: collapse; margin: auto;">'

    for r in range(field.rows):
        html += "<tr>"
        for c in range(field.cols):
            i = r * field.cols + c
            count = str(field.counts[i])

            if inferred is not None and inferred[i]:
                cell, bg, text_color = "F", "#ffa500", "#ffffff"
            elif field.is_mine[i]:
                cell, bg, text_color = "M", "#ffcccc", "#ff0000"
            elif state is not None and state[i] is None:
                cell, bg, text_color = ".", "#c0c0c0", "#666666"
            else:
                cell = count
                bg = "#f0f0f0" if cell == "0" else "#ffffff"
                text_color = COLORS.get(cell, "#000000")

            if highlight_cell and (r, c) == highlight_cell:
                border = "3px solid #ff0000"
            else:
                border = "1px solid #999"
            display = cell if cell != "0" else " "

            html += f'''<td style="
                width: {cell_size}px; height: {cell_size}px;
                text-align: center;
                background: {bg};
                border: {border};
                color: {text_color};
                font-weight: bold;
                font-size: {font_size};
            ">{display}</td>'''
        html += "</tr>"

    html += "</table></div>"
    return html


def parse_seed(text: str) -> Optional[int]:
    """Return the integer seed typed in the sidebar, or None if blank or malformed."""
    try:
        return int(text)
    except ValueError:
        return None


def main():
    st.set_page_config(
        page_title="Minefield Generator",
        page_icon="💣",
        layout="wide",
    )

    st.title("Minefield Generator")
    st.markdown("""
    Generates minefields that can be fully opened by local deduction, without guessing.
    """)

    # Sidebar configuration
    st.sidebar.header("Field Configuration")

    preset_names = [f"{name.title()} ({r}x{c}, {d}%)" for name, (r, c, d) in PRESETS.items()]
    preset = st.sidebar.selectbox("Preset", preset_names + ["Custom"])

    if preset == "Custom":
        rows = st.sidebar.slider("Rows", 1, 30, 8)
        cols = st.sidebar.slider("Columns", 1, 30, 8)
        density = st.sidebar.slider("Mine density (%)", 0, 100, 15)
    else:
        rows, cols, density = list(PRESETS.values())[preset_names.index(preset)]

    max_attempts = st.sidebar.number_input(
        "Max attempts", min_value=1, max_value=100000, value=DEFAULT_MAX_ATTEMPTS
    )
    seed_text = st.sidebar.text_input("Seed (blank for random)", "")
    seed = parse_seed(seed_text)
    if seed is None and seed_text.strip():
        st.sidebar.warning(f"Seed {seed_text!r} is not an integer; using a random seed.")
    rng = random.Random(seed)

    # Initialize session state
    if "field" not in st.session_state:
        st.session_state.field = None
        st.session_state.report = None
        st.session_state.summary = None
        st.session_state.steps_history = []
        st.session_state.current_step = 0

    def run_solver(field: Field, start: Tuple[int, int]) -> None:
        solver = DeductiveSolver(field, record_steps=True)
        solver.attempt_solve(*start)
        st.session_state.summary = solver.summary()
        st.session_state.steps_history = solver.steps_history
        st.session_state.current_step = max(0, len(solver.steps_history) - 1)

    btn_col1, btn_col2 = st.columns(2)
    with btn_col1:
        if st.button("Generate Solvable Field", type="primary"):
            field = Field(rows, cols)
            report = generate_solvable(field, density, int(max_attempts), rng)
            st.session_state.field = field
            st.session_state.report = report
            st.session_state.summary = None
            st.session_state.steps_history = []
            if report.start is not None:
                run_solver(field, report.start)
            st.rerun()

    with btn_col2:
        if st.button("Generate Random Field"):
            st.session_state.field = generate(Field(rows, cols), density, rng)
            st.session_state.report = None
            st.session_state.summary = None
            st.session_state.steps_history = []
            st.rerun()

    field: Optional[Field] = st.session_state.field
    if field is None:
        st.info("Click 'Generate Solvable Field' to search for a field that needs no guessing.")
        return

    board_col, stats_col = st.columns([3, 1])

    with board_col:
        st.subheader("Field")

        start_col1, start_col2, start_col3 = st.columns([1, 1, 2])
        with start_col1:
            sr = st.number_input("Start row", 0, field.rows - 1, 0)
        with start_col2:
            sc = st.number_input("Start column", 0, field.cols - 1, 0)
        with start_col3:
            if st.button("Solve From Start"):
                run_solver(field, (int(sr), int(sc)))
                st.rerun()

        steps_history: List[Dict[str, Any]] = st.session_state.steps_history
        summary = st.session_state.summary

        if steps_history:
            total_steps = len(steps_history)
            step_display = st.slider("Step", 1, total_steps, st.session_state.current_step + 1)
            st.session_state.current_step = step_display - 1
            step = steps_history[st.session_state.current_step]

            label = "First reveal" if step["method"] == "first_move" else f"Deduction pass {step['pass_number']}"
            st.info(f"**Step {step_display}/{total_steps}**: {label}")

            html = render_field_html(
                field,
                state=step["state_snapshot"],
                inferred=step["inferred_snapshot"],
                highlight_cell=summary["start"] if summary else None,
            )
        else:
            html = render_field_html(field)

        st.markdown(html, unsafe_allow_html=True)

        st.download_button("Download Field", dumps_field(field), file_name="field.txt")

    with stats_col:
        st.subheader("Statistics")
        st.metric("Mines", field.mine_count)
        st.metric("Safe cells", field.safe_count)

        report = st.session_state.report
        if report is not None:
            if report.solvable:
                st.success(f"Solvable from {report.start} after {report.attempts} attempt(s).")
            else:
                st.error(f"No solvable field after {report.attempts} attempts.")

        if summary is not None:
            st.markdown("---")
            st.text(f"Start: {summary['start']}")
            st.text(f"Opened: {summary['opened_count']} / {summary['safe_count']}")
            st.text(f"Passes: {summary['passes_count']}")
            st.text(f"Flood-opened: {summary['flood_opened_count']}")
            st.text(f"Inferred mines: {summary['inferred_mine_count']}")
            st.text(f"Safe-saturation opens: {summary['safe_opened_count']}")
            if summary["success"]:
                st.success("Every safe cell opened without guessing.")
            else:
                st.warning("Deduction stalled; this start needs a guess.")


if __name__ == "__main__":
    main()
