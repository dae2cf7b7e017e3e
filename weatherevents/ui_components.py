"""Shared UI components: step headers, callout boxes, check questions, navigation."""
import streamlit as st

from weatherevents.constants import STEP_TITLES


def step_header(number, subtitle=None):
    """Render the header for one step of the walkthrough."""
    st.caption(f"Step {number} of {len(STEP_TITLES)}")
    st.title(f"{number}. {STEP_TITLES[number]}")
    if subtitle:
        st.markdown(f"*{subtitle}*")
    st.divider()


def concept_box(title, content):
    """Render a highlighted concept box."""
    st.markdown(f"""
<div style="background-color: #EAF2F8; padding: 18px; border-radius: 8px; border-left: 5px solid #1F618D; margin: 10px 0;">
<h4 style="color: #1F618D; margin-top: 0;">{title}</h4>
<p style="color: #154360;">{content}</p>
</div>
""", unsafe_allow_html=True)


def formula_box(title, formula, explanation=""):
    """Render a formula with explanation."""
    st.markdown(f"**{title}**")
    st.latex(formula)
    if explanation:
        st.caption(explanation)


def insight_box(text):
    st.info(f"**What this shows:** {text}")


def warning_box(text):
    st.warning(f"**Watch out:** {text}")


def code_example(code, language="python"):
    """Render a collapsible code snippet matching what the page just did."""
    with st.expander("Show the pandas code"):
        st.code(code, language=language)


def check_question(question, options, correct_idx, explanation="", key="check"):
    """Render a self-check question. Returns True/False once answered, else None."""
    st.subheader("Check Yourself")
    answer = st.radio(question, options, key=key, index=None)
    if answer is None:
        return None
    correct = options.index(answer) == correct_idx
    if correct:
        st.success("Correct!")
    else:
        st.error(f"Not quite. The answer is: **{options[correct_idx]}**")
    if explanation:
        st.caption(explanation)
    return correct


def takeaways(points):
    """Render the step summary as a bullet list."""
    st.subheader("Summary")
    for p in points:
        st.markdown(f"- {p}")


def navigation(prev_page=None, next_page=None):
    """Render links to the previous and next steps."""
    col1, _, col3 = st.columns([1, 2, 1])
    with col1:
        if prev_page:
            st.page_link(f"pages/{prev_page}", label=f"← {_title_of(prev_page)}")
    with col3:
        if next_page:
            st.page_link(f"pages/{next_page}", label=f"{_title_of(next_page)} →")


def _title_of(page_file):
    number = int(page_file.split("_", 1)[0])
    return STEP_TITLES[number]
