"""Streamlit UI: framework, shared components and page bodies."""
