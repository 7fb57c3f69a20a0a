from hreval.web.framework.page import init_page, PageSpec
from hreval.web.pages_impl.dashboard import render

# MUST be the first Streamlit command on this page
init_page(PageSpec(title="ダッシュボード", icon="🏠"))

render()
