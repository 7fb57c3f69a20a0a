from hreval.web.framework.page import init_page, PageSpec
from hreval.web.pages_impl.director_finalize import render

# MUST be the first Streamlit command on this page
init_page(PageSpec(title="最終確認", icon="✅"))

render()
