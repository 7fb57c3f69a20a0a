from hreval.web.framework.page import init_page, PageSpec
from hreval.web.pages_impl.goals import render

# MUST be the first Streamlit command on this page
init_page(PageSpec(title="目標設定", icon="🎯"))

render()
