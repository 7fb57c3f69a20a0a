from hreval.web.framework.page import init_page, PageSpec
from hreval.web.pages_impl.my_evaluations import render

# MUST be the first Streamlit command on this page
init_page(PageSpec(title="評価履歴", icon="📄"))

render()
