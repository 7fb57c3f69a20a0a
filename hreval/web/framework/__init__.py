"""Frontend framework layer for the Streamlit UI.

This package centralizes:
- page initialization (set_page_config + CSS)
- session restoration and route guards
- permission-filtered sidebar navigation
- session-state helpers
"""
