from hreval.web.framework.page import init_page, PageSpec
from hreval.web.pages_impl.manager_review import render

# MUST be the first Streamlit command on this page
init_page(PageSpec(title="評価確認・修正", icon="🛡️"))

render()
