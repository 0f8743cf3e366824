"""Life Decisions (Streamlit)

UI/Experience

Principles:
- UI only renders + triggers.
- Core domain and engine are pure Python modules; the GameSession in
  st.session_state is the only mutable game state.
- Every run is deterministic per session id.

Entry point: streamlit run app.py
"""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime, timezone
from typing import Dict, List

import streamlit as st

import core
from content.catalog import chapter_info, is_chapter_boundary
from core.finance import total_debt
from core.formatting import format_currency, format_currency_full, format_percentage
from core.profiles import DEFAULT_GOALS, DEFAULT_PROFILES, get_goal_spec, get_profile_spec
from engine.logging import dumps_run_export
from engine.results import credit_score_grade, overall_grade
from engine.session import GameSession

APP_TITLE = "Life Decisions"
APP_SUBTITLE = "30 money decisions, 15 simulated years. Every choice moves your balance sheet; then six months pass."
APP_VERSION = "1.0.0"
EXPECTED_CORE_API = "core-v1-20261017"

st.set_page_config(page_title=APP_TITLE, page_icon="💸", layout="wide", initial_sidebar_state="expanded")

CSS = """
<style>
.block-container {padding-top: 2.6rem; padding-bottom: 2.4rem; max-width: 1200px;}
.scenario {
  border-left: 4px solid #3fb68b;
  border-radius: 8px;
  padding: 12px 18px;
  background: rgba(63,182,139,0.06);
}
.option {
  border: 1px solid rgba(63,182,139,0.25);
  border-radius: 12px;
  padding: 14px 16px 10px 16px;
}
.tag {
  display: inline-block;
  margin-right: 4px;
  padding: 1px 8px;
  border-radius: 6px;
  background: rgba(63,182,139,0.15);
  font-size: 0.78rem;
}
hr.divider {border: none; border-top: 1px dashed rgba(128,128,128,0.35); margin: 0.9rem 0;}
.note {font-size: 0.85rem; color: rgba(160,160,160,1);}
</style>
"""

st.markdown(CSS, unsafe_allow_html=True)


def check_core_or_stop() -> None:
    """Stop with a helpful message if app and core come from different builds."""
    api_ver = getattr(core, "API_VERSION", None)
    if api_ver != EXPECTED_CORE_API:
        st.error(
            "Core version does not match the app.\n\n"
            f"Expected core: {EXPECTED_CORE_API}, found: {api_ver!r}"
        )
        st.stop()


check_core_or_stop()


# =========================
# Helpers
# =========================


EFFECT_LABELS = {
    "cash": ("Cash ↑", "Cash ↓"),
    "monthly_income": ("Income ↑", "Income ↓"),
    "monthly_expenses": ("Expenses ↑", "Expenses ↓"),
    "investments": ("Investments ↑", "Investments ↓"),
    "credit_card_debt": ("Card debt ↑", "Card debt ↓"),
    "student_loan": ("Student loan ↑", "Student loan ↓"),
    "auto_loan": ("Auto loan ↑", "Auto loan ↓"),
    "mortgage": ("Mortgage ↑", "Mortgage ↓"),
    "credit_score": ("Credit ↑", "Credit ↓"),
    "stress": ("Stress ↑", "Stress ↓"),
    "risk_level": ("Risk ↑", "Risk ↓"),
}


def _effects_summary(effects: Dict[str, object]) -> str:
    """Human summary, no numbers."""
    parts: List[str] = []
    for k, (up, down) in EFFECT_LABELS.items():
        v = effects.get(k)
        if v is None or abs(float(v)) < 1e-9:  # type: ignore[arg-type]
            continue
        parts.append(up if float(v) > 0 else down)  # type: ignore[arg-type]
    if effects.get("long_term_choice"):
        parts.append("Long-term 🔮")
    return " · ".join(parts) if parts else "Neutral"


# =========================
# Session State
# =========================


def _ensure_state() -> None:
    ss = st.session_state
    if "started" not in ss:
        ss.started = False
    if "profile_key" not in ss:
        ss.profile_key = "scratch"
    if "goal_key" not in ss:
        ss.goal_key = "stability"
    if "educator_mode" not in ss:
        ss.educator_mode = False
    if "session" not in ss:
        ss.session = None
    if "last_outcome" not in ss:
        ss.last_outcome = ""


def _reset_run() -> None:
    ss = st.session_state
    for k in list(ss.keys()):
        del ss[k]
    _ensure_state()


def _start_run() -> None:
    ss = st.session_state
    session = GameSession()
    session.start(ss.profile_key, ss.goal_key, educator_mode=bool(ss.educator_mode))
    ss.session = session
    ss.started = True
    ss.last_outcome = ""


# =========================
# UI Pages
# =========================


def page_setup() -> None:
    st.title(APP_TITLE)
    st.caption(APP_SUBTITLE)

    st.markdown("""
    ### How to play
    - Pick a **starting profile** and a **goal** in the sidebar.
    - Each decision has three choices. Effects land immediately, then **six months pass**:
      income and expenses flow, prices inflate, debt accrues interest, the market moves.
    - Run out of cash and the shortfall lands on your credit card.
    - You can undo the last decision. Badges you earned stay earned.
    """)


def page_run() -> None:
    ss = st.session_state
    session: GameSession = ss.session
    state = session.state

    st.title(APP_TITLE)
    chapter = chapter_info(session.catalog, session.chapter())
    if chapter and not state.completed:
        st.caption(f"Chapter {chapter.number}: {chapter.title} · {chapter.description}")

    a, b, c, d, e = st.columns([1.0, 1.0, 1.0, 1.0, 1.4])
    a.metric("Age", f"{state.age:.1f}")
    b.metric("Cash", format_currency(state.cash))
    c.metric("Net worth", format_currency(state.net_worth))
    d.metric("Credit", f"{state.credit_score:.0f}")
    e.progress(min(1.0, session.progress() / 100.0), text=f"Decision {min(state.current_decision + 1, len(session.catalog))}/{len(session.catalog)}")

    with st.expander("📊 Details"):
        r1, r2, r3, r4, r5, r6 = st.columns(6)
        r1.metric("Income / mo", format_currency(state.monthly_income))
        r2.metric("Expenses / mo", format_currency(state.monthly_expenses))
        r3.metric("Investments", format_currency(state.investments))
        r4.metric("Total debt", format_currency(total_debt(state.debt)))
        r5.metric("Stress", f"{state.stress:.0f}/100")
        r6.metric("Inflation", format_percentage(state.inflation_rate))
        st.caption(f"Real purchasing power index: {state.real_purchasing_power:.2f}")

    st.markdown("<hr class='divider'/>", unsafe_allow_html=True)

    if ss.last_outcome:
        st.markdown("### Outcome")
        st.markdown(ss.last_outcome)
        ss.last_outcome = ""
        st.markdown("<hr class='divider'/>", unsafe_allow_html=True)

    if state.completed:
        st.success("🏁 Fifteen years later... see the Results page.")
        return

    decision = session.current_decision()
    if decision is None:
        st.error("No decision at this index. Reset the run.")
        return

    if is_chapter_boundary(state.current_decision) and chapter:
        st.info(f"Chapter {chapter.number - 1} complete! Up next: {chapter.title}")

    st.markdown(f"## {decision.title}")
    st.markdown("<div class='scenario'>", unsafe_allow_html=True)
    st.markdown(decision.scenario_text)
    st.markdown(" ".join(f"<span class='tag'>{t}</span>" for t in decision.concept_tags), unsafe_allow_html=True)
    st.markdown(f"<div class='note'>Why it matters: {decision.why_it_matters}</div>", unsafe_allow_html=True)
    if decision.bias_nudge:
        st.markdown(f"<div class='note'>🧠 {decision.bias_nudge}</div>", unsafe_allow_html=True)
    st.markdown("</div>", unsafe_allow_html=True)

    def _on_choose(choice_id: str) -> None:
        ss = st.session_state
        session: GameSession = ss.session
        choice = next(c for c in decision.choices if c.id == choice_id)
        badges = session.make_choice(decision.id, choice_id)

        outcome = choice.explanation + "\n\n"
        if choice.hidden_cost:
            outcome += f"**Hidden cost:** {choice.hidden_cost}\n\n"
        if ss.educator_mode and choice.educator_note:
            outcome += f"**Educator note:** {choice.educator_note}\n\n"
        log = session.logs[-1]
        if log.get("inflation_shock"):
            outcome += "---\n**Inflation spike!** Prices now rise 8% a year and you had no emergency fund.\n\n"
        for badge in badges:
            outcome += f"---\n{badge.icon} **Badge unlocked: {badge.name}** · {badge.description}\n\n"
        ss.last_outcome = outcome
        st.rerun()

    st.markdown("### Your move")
    cols = st.columns(len(decision.choices))
    for col, choice in zip(cols, decision.choices):
        with col:
            st.markdown("<div class='option'>", unsafe_allow_html=True)
            st.markdown(f"#### {choice.label}")
            st.markdown(f"<div class='note'>{choice.short_tradeoff}</div>", unsafe_allow_html=True)
            st.markdown(f"<span class='tag'>{_effects_summary(choice.to_dict()['effects'])}</span>", unsafe_allow_html=True)
            if st.button("Choose", key=f"choose_{decision.id}_{choice.id}", use_container_width=True):
                _on_choose(choice.id)
            st.markdown("</div>", unsafe_allow_html=True)

    st.markdown("<hr class='divider'/>", unsafe_allow_html=True)
    if st.button("↩️ Undo last decision", disabled=not state.history):
        if session.undo_last_choice():
            st.rerun()


def page_history() -> None:
    ss = st.session_state
    session: GameSession = ss.session
    st.title("History")
    st.caption("State as it was before each decision (rounded).")

    if not session.state.history:
        st.info("No decisions yet.")
        return

    rows = []
    for snap, rec in zip(session.state.history, session.state.choices_made):
        rows.append({
            "decision": snap.decision_id,
            "choice": rec.choice_id,
            "age": snap.age,
            "cash": format_currency_full(snap.cash),
            "investments": format_currency_full(snap.investments),
            "debt": format_currency_full(total_debt(snap.debt)),
            "net worth": format_currency_full(snap.net_worth),
            "credit": int(snap.credit_score),
            "stress": int(snap.stress),
            "inflation": format_percentage(snap.inflation_rate),
            "purchasing power": snap.real_purchasing_power,
        })
    st.dataframe(rows, use_container_width=True, hide_index=True)

    if session.config.educator_mode:
        st.subheader("Jump to decision (educator)")
        ix = st.number_input("Decision index", min_value=0, max_value=int(session.state.current_decision), value=int(session.state.current_decision), step=1)
        if st.button("Go"):
            session.go_to_decision(int(ix))
            st.rerun()


def page_results() -> None:
    ss = st.session_state
    session: GameSession = ss.session
    state = session.state
    st.title("Results")

    grade = overall_grade(state)
    st.markdown(f"## {grade.grade} · {grade.title}")
    a, b, c = st.columns(3)
    a.metric("Net worth", format_currency_full(state.net_worth))
    b.metric("Credit score", f"{state.credit_score:.0f}", credit_score_grade(state.credit_score))
    c.metric("Badges", f"{len(session.unlocked_badges())}/{len(state.badges)}")

    st.subheader("Badges")
    for badge in state.badges:
        mark = badge.icon if badge.unlocked else "🔒"
        when = f" (decision {badge.unlocked_at})" if badge.unlocked else ""
        st.markdown(f"{mark} **{badge.name}**{when} · {badge.description}")

    st.subheader("Takeaways")
    for t in session.takeaways():
        st.markdown(f"**{t.title}** <span class='tag'>{t.concept_tag}</span>", unsafe_allow_html=True)
        st.markdown(t.description)


def page_debug() -> None:
    ss = st.session_state
    session: GameSession = ss.session
    st.title("Debug")

    st.subheader("EngineConfig")
    st.json(asdict(session.config))

    st.subheader("GameState")
    st.json(asdict(session.state))

    st.subheader("Last decision log")
    st.json(session.logs[-1] if session.logs else {})


def export_import_controls() -> None:
    ss = st.session_state
    st.sidebar.markdown("---")
    st.sidebar.markdown("### Run Export / Import")

    session = ss.get("session")
    payload = session.export() if session is not None else {}
    payload["meta"] = {"app": APP_TITLE, "version": APP_VERSION, "exported_at": datetime.now(timezone.utc).isoformat()}

    st.sidebar.download_button(
        "Download run file",
        data=dumps_run_export(payload).encode("utf-8"),
        file_name=f"life_decisions_{session.state.session_id if session else 'run'}.json",
        mime="application/json",
        disabled=not bool(ss.get("started")),
    )

    up = st.sidebar.file_uploader("Load run file", type=["json"], accept_multiple_files=False, key="run_upload")
    # the uploader keeps its file across reruns; load each upload once
    if up is not None and ss.get("loaded_upload") != (up.name, up.size):
        ss.loaded_upload = (up.name, up.size)
        try:
            ss.session = GameSession.from_export_text(up.read().decode("utf-8"))
            ss.profile_key = ss.session.config.profile_key
            ss.goal_key = ss.session.config.goal_key
            ss.educator_mode = ss.session.config.educator_mode
            ss.started = True
            st.sidebar.success("Run loaded.")
            st.rerun()
        except ValueError as e:
            st.sidebar.error(f"Import failed: {e}")


# =========================
# Sidebar
# =========================


def sidebar() -> str:
    ss = st.session_state

    st.sidebar.markdown(f"**{APP_TITLE}**  ")
    st.sidebar.markdown(f"v{APP_VERSION}")
    st.sidebar.markdown("---")

    profile_keys = list(DEFAULT_PROFILES.keys())
    ss.profile_key = st.sidebar.selectbox(
        "Starting profile", profile_keys, index=profile_keys.index(ss.profile_key),
        format_func=lambda k: DEFAULT_PROFILES[k].title, disabled=ss.started,
    )
    st.sidebar.caption(get_profile_spec(ss.profile_key).desc)

    goal_keys = list(DEFAULT_GOALS.keys())
    ss.goal_key = st.sidebar.selectbox(
        "Goal", goal_keys, index=goal_keys.index(ss.goal_key),
        format_func=lambda k: DEFAULT_GOALS[k].title, disabled=ss.started,
    )
    st.sidebar.caption(get_goal_spec(ss.goal_key).desc)

    ss.educator_mode = st.sidebar.checkbox("Educator mode", value=bool(ss.educator_mode), disabled=ss.started)

    cols = st.sidebar.columns(2)
    with cols[0]:
        if st.button("Start", disabled=ss.started, use_container_width=True):
            _start_run()
            st.rerun()
    with cols[1]:
        if st.button("Reset", use_container_width=True):
            _reset_run()
            st.rerun()

    export_import_controls()

    st.sidebar.markdown("---")
    return st.sidebar.radio("Page", ["Play", "History", "Results", "Debug"], index=0)


# =========================
# Main
# =========================


def main() -> None:
    _ensure_state()
    page = sidebar()

    ss = st.session_state
    if not ss.started or ss.session is None:
        page_setup()
        return

    if page == "Play":
        page_run()
    elif page == "History":
        page_history()
    elif page == "Results":
        page_results()
    else:
        page_debug()


if __name__ == "__main__":
    main()
