"""
Simple Bayes Playground
Interactive Naive Bayes training and classification.
"""

import math

import streamlit as st
from dotenv import load_dotenv

from simple_bayes import Bayes, SimpleBayesError, load_settings

# Load environment variables
load_dotenv()

st.set_page_config(
    page_title="Simple Bayes",
    page_icon="🧮",
    layout="wide",
)

# Smallest value the widget can show at six decimals
MIN_UNSEEN_PROB = 0.000001


def unseen_prob_start(default_prob):
    """Clamp a configured probability into the widget range."""
    return min(max(default_prob, MIN_UNSEEN_PROB), 1.0)


def init_session_state():
    """Initialize session state variables."""
    if "bayes" not in st.session_state:
        st.session_state.bayes = None
    if "history" not in st.session_state:
        st.session_state.history = []


def render_sidebar(settings):
    """Render the sidebar with model setup; returns the unseen-term probability."""
    with st.sidebar:
        st.markdown("### ⚙️ Model")

        names = st.text_input(
            "Categories",
            value="interesting, uninteresting",
            help="Comma-separated category names",
        )
        tie_break = st.radio(
            "Tie-break",
            ["last", "first"],
            index=0 if settings.tie_break.value == "last" else 1,
            horizontal=True,
        )

        if st.button("Create model", use_container_width=True):
            categories = [n.strip() for n in names.split(",") if n.strip()]
            try:
                st.session_state.bayes = Bayes(*categories, tie_break=tie_break)
                st.session_state.history = []
            except SimpleBayesError as e:
                st.error(str(e))

        default_prob = st.number_input(
            "Unseen-term probability",
            min_value=MIN_UNSEEN_PROB,
            max_value=1.0,
            value=unseen_prob_start(settings.default_prob),
            step=0.001,
            format="%.6f",
        )

        bayes = st.session_state.bayes
        if bayes is not None:
            st.markdown("---")
            st.markdown("### 📊 Corpus")
            st.metric("Terms", bayes.count_terms())
            st.metric("Unique terms", bayes.count_unique_terms())
            for name, cat in bayes.categories.items():
                st.caption(f"{name}: {cat.total()} terms")

        return default_prob


def render_training(bayes):
    """Render the train/untrain form."""
    st.markdown("## 📚 Training")
    category = st.selectbox("Category", bayes.category_names)
    text = st.text_area("Example text", height=120, key="train_text")

    col1, col2 = st.columns(2)
    with col1:
        if st.button("Train", type="primary", use_container_width=True, disabled=not text):
            bayes.train(category, text)
            st.session_state.history.append(("train", category, text))
            st.success(f"Trained {category}")
    with col2:
        if st.button("Untrain", use_container_width=True, disabled=not text):
            bayes.untrain(category, text)
            st.session_state.history.append(("untrain", category, text))
            st.info(f"Untrained {category}")

    if st.session_state.history:
        with st.expander(f"History ({len(st.session_state.history)})"):
            for action, category, text in reversed(st.session_state.history):
                st.markdown(f"**{action}** `{category}`: {text[:120]}")


def render_classification(bayes, default_prob):
    """Render the classification form and per-category scores."""
    st.markdown("## 🔎 Classify")
    text = st.text_area("Text to classify", height=120, key="classify_text")

    if not st.button("Classify", type="primary", disabled=not text):
        return

    try:
        winner = bayes.classify(text, default_prob)
        log_scores = bayes.log_classifications(text, default_prob)
        plain_scores = bayes.classifications(text, default_prob)
    except SimpleBayesError as e:
        st.error(str(e))
        return

    st.success(f"**{winner}**")
    rows = [
        {
            "category": cat.name,
            "log score": log_score if not math.isinf(log_score) else None,
            "score": score,
        }
        for (log_score, cat), (score, _) in zip(log_scores, plain_scores)
    ]
    st.dataframe(rows, use_container_width=True)


def main():
    """Main application entry point."""
    init_session_state()
    try:
        settings = load_settings()
    except SimpleBayesError as e:
        st.error(f"Configuration error: {e}")
        st.stop()

    st.markdown("# 🧮 Simple Bayes")
    st.caption("Train categories from example text, then classify new text.")

    default_prob = render_sidebar(settings)
    bayes = st.session_state.bayes
    if bayes is None:
        st.info("👈 Create a model in the sidebar to get started.")
        return

    col_left, col_right = st.columns(2)
    with col_left:
        render_training(bayes)
    with col_right:
        render_classification(bayes, default_prob)


if __name__ == "__main__":
    main()
