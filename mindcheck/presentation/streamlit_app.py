import logging
import os

import streamlit as st

from mindcheck.application.session import AssessmentSession
from mindcheck.application.use_cases import SelfAssessmentUseCase
from mindcheck.domain.models import Severity
from mindcheck.infrastructure.classifier.factory import build_classifier
from mindcheck.infrastructure.config import Settings
from mindcheck.infrastructure.history.json_store import JsonHistoryStore
from mindcheck.presentation.report import (
    DISCLAIMER,
    chart_shares,
    confidence_band,
    format_verdict_markdown,
    severity_label,
)


logger = logging.getLogger(__name__)


CONSENT_POINTS = [
    "This assessment is for educational and awareness purposes only",
    "It is not a substitute for professional medical advice or diagnosis",
    "Your answers are sent to a text-classification service for analysis",
    "Results are stored only on this device (last 10 assessments)",
]


def _build_use_case(settings: Settings) -> SelfAssessmentUseCase:
    history = JsonHistoryStore(storage_path=settings.history_path, capacity=settings.history_limit)
    return SelfAssessmentUseCase(
        classifier=build_classifier(settings),
        history=history,
        timeout_seconds=settings.classifier_timeout_seconds,
    )


def _init_session_state(settings: Settings):
    if "use_case" not in st.session_state:
        st.session_state.use_case = _build_use_case(settings)
    if "assessment" not in st.session_state:
        st.session_state.assessment = AssessmentSession(st.session_state.use_case)
    if "page" not in st.session_state:
        st.session_state.page = "consent"
    if "draft_answer" not in st.session_state:
        st.session_state.draft_answer = ""


def _go(page: str):
    st.session_state.page = page
    st.rerun()


def _render_sidebar(settings: Settings):
    st.sidebar.title("⚙️ Settings")
    st.sidebar.caption(f"**Classifier:** {settings.classifier_backend}")
    st.sidebar.caption(f"**Timeout:** {settings.classifier_timeout_seconds:.0f}s per answer")
    st.sidebar.divider()

    if st.sidebar.button("📝 New Assessment", use_container_width=True):
        st.session_state.assessment.start_new()
        st.session_state.draft_answer = ""
        _go("consent")
    if st.sidebar.button("🕒 Past Assessments", use_container_width=True):
        _go("history")


def _render_consent():
    st.markdown("# 🛡️ Privacy & Consent")
    st.markdown("Before we begin, please review how your answers are handled.")
    st.info("\n".join(f"- {point}" for point in CONSENT_POINTS))

    agreed = st.checkbox("I understand that this is not a medical diagnosis and agree to the terms above.")
    if st.button("I Agree - Start Assessment", disabled=not agreed, type="primary"):
        _go("survey")


def _render_survey():
    assessment: AssessmentSession = st.session_state.assessment
    question = assessment.current_question
    if question is None:
        _go("results")
        return

    total = len(assessment.questions)
    st.markdown("# 🧠 Mental Health Assessment")
    st.caption(f"Question {assessment.current_step + 1} of {total}")
    st.progress(assessment.progress)

    st.markdown(f"### {question.question}")
    st.caption("Required" if question.required else "Optional")

    with st.form(f"question_{question.id}"):
        if question.type == "textarea":
            answer = st.text_area("Your answer", value=st.session_state.draft_answer,
                                  placeholder=question.placeholder, height=160)
        else:
            answer = st.text_input("Your answer", value=st.session_state.draft_answer,
                                   placeholder=question.placeholder)

        col1, col2 = st.columns([1, 1])
        with col1:
            back = st.form_submit_button("⬅️ Previous", disabled=assessment.current_step == 0,
                                         use_container_width=True)
        with col2:
            label = "Complete" if assessment.is_last_question else "Next ➡️"
            submit = st.form_submit_button(label, use_container_width=True)

    if back:
        st.session_state.draft_answer = assessment.go_back() or ""
        st.rerun()

    if submit:
        try:
            with st.spinner("We are thinking about you... analysing your response"):
                verdict = assessment.submit_answer(answer)
        except ValueError as e:
            st.error(f"❌ {e}")
            return
        st.session_state.draft_answer = ""
        if verdict is not None:
            _go("results")
        st.rerun()


def _render_results():
    assessment: AssessmentSession = st.session_state.assessment
    verdict = assessment.verdict
    if verdict is None:
        st.warning("No completed assessment yet.")
        if st.button("Take the Assessment"):
            _go("consent")
        return

    st.markdown("# 📋 Your Mental Health Assessment")
    st.markdown("Based on your responses, here's what we found and our recommendations for you.")

    if verdict.severity == Severity.HIGH and verdict.primary_condition == "Suicide Risk":
        st.error("🚨 **Please reach out for help now.** Contact a crisis line or emergency services.")

    col1, col2 = st.columns([1, 1])
    with col1:
        st.metric("Primary Assessment", verdict.primary_condition)
        _, band_text = confidence_band(verdict.confidence)
        st.caption(f"Assessment Confidence: {verdict.confidence * 100:.0f}% - {band_text}")
    with col2:
        st.metric("Severity", severity_label(verdict.severity))

    st.markdown("## 📊 Condition Breakdown")
    st.bar_chart({name: pct for name, pct in chart_shares(verdict)})

    st.markdown("## 🔑 Key Signals")
    if verdict.matched_keywords:
        st.markdown(" ".join(f"`{k.keyword} ×{k.count}`" for k in verdict.matched_keywords))
    else:
        st.caption("No specific keywords were flagged.")

    st.markdown("## 📝 Recommendations")
    st.markdown("\n".join(f"{i}. {r}" for i, r in enumerate(verdict.recommendations, 1)))

    if verdict.resources:
        st.markdown("## 📚 Resources")
        st.markdown("\n".join(f"- {r}" for r in verdict.resources))

    st.download_button(
        "⬇️ Download Report",
        data=format_verdict_markdown(verdict),
        file_name=f"assessment_{verdict.timestamp:%Y%m%d_%H%M}.md",
        mime="text/markdown",
    )
    if st.button("🔄 Retake Assessment"):
        assessment.start_new()
        _go("survey")

    st.info(DISCLAIMER)


def _render_history():
    use_case: SelfAssessmentUseCase = st.session_state.use_case
    st.markdown("# 🕒 Past Assessments")

    entries = use_case.history()
    if not entries:
        st.info("No past assessments yet.")
        return

    for index, entry in enumerate(entries):
        title = f"{entry.timestamp:%B %d, %Y %H:%M} - {entry.primary_condition}"
        with st.expander(title):
            st.markdown(format_verdict_markdown(entry))
            if st.button("🗑️ Delete", key=f"delete_{index}_{entry.timestamp.isoformat()}"):
                try:
                    use_case.delete_history_entry(index)
                except (IndexError, OSError) as e:
                    logger.warning("Could not delete history entry: %s", e)
                    st.error("Unable to delete assessment. Please try again.")
                    return
                st.rerun()

    st.divider()
    if st.button("🧹 Clear All History"):
        try:
            use_case.clear_history()
        except OSError as e:
            logger.warning("Could not clear history: %s", e)
            st.error("Unable to clear history. Please try again.")
            return
        st.rerun()


PAGES = {
    "consent": _render_consent,
    "survey": _render_survey,
    "results": _render_results,
    "history": _render_history,
}


def main():
    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))

    st.set_page_config(
        page_title="MindCheck Self-Assessment",
        page_icon="🧠",
        layout="centered",
        initial_sidebar_state="expanded",
    )

    settings = Settings()
    _init_session_state(settings)
    _render_sidebar(settings)

    PAGES.get(st.session_state.page, _render_consent)()


if __name__ == "__main__":
    main()
