import streamlit as st

# badge colours per evaluation status
STATUS_COLORS = {
    "NOT_STARTED": ("#f3f4f6", "#1f2937"),
    "SELF_SUBMITTED": ("#dbeafe", "#1e40af"),
    "EVALUATOR_SUBMITTED": ("#dbeafe", "#1e40af"),
    "MANAGER_APPROVED": ("#fef9c3", "#854d0e"),
    "DIRECTOR_EVALUATED": ("#fef9c3", "#854d0e"),
    "FINALIZED": ("#dcfce7", "#166534"),
}


def load_app_style():
    """Inject the shared CSS: neutral sidebar, badges, grade chips."""
    st.markdown("""
        <style>
        section[data-testid="stSidebar"] {
            background-color: #ffffff;
            border-right: 1px solid #e5e7eb;
        }

        header[data-testid="stHeader"] {
            background-color: transparent;
        }

        h1, h2, h3 {
            color: #111827;
            letter-spacing: -0.01em;
        }

        .stButton > button {
            border-radius: 8px;
            font-weight: 500;
        }

        .stButton > button[kind="primary"] {
            background-color: #111827;
            border: none;
            color: #ffffff;
        }
        .stButton > button[kind="primary"]:hover {
            background-color: #1f2937;
        }

        /* status badge */
        .hr-badge {
            display: inline-flex;
            align-items: center;
            padding: 0.125rem 0.625rem;
            border-radius: 9999px;
            font-size: 0.75rem;
            font-weight: 500;
        }

        /* grade chip */
        .hr-grade {
            display: inline-flex;
            align-items: center;
            justify-content: center;
            min-width: 2.5rem;
            padding: 0.25rem 0.5rem;
            border-radius: 4px;
            font-size: 0.875rem;
            font-weight: 700;
            background-color: #111827;
            color: #ffffff;
        }
        .hr-grade.empty {
            background-color: #f3f4f6;
            color: #9ca3af;
        }
        .hr-grade.final {
            background-color: #1e3a8a;
        }
        </style>
    """, unsafe_allow_html=True)
