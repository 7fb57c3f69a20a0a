from hreval.web.framework.page import init_page, PageSpec
from hreval.web.pages_impl.self_evaluation import render

# MUST be the first Streamlit command on this page
init_page(PageSpec(title="自己評価入力", icon="📝"))

render()
