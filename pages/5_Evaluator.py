from hreval.web.framework.page import init_page, PageSpec
from hreval.web.pages_impl.evaluator import render

# MUST be the first Streamlit command on this page
init_page(PageSpec(title="評価入力", icon="✍️"))

render()
