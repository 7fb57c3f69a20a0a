from hreval.web.framework.page import init_page, PageSpec
from hreval.web.pages_impl.admin_settings import render

# MUST be the first Streamlit command on this page
init_page(PageSpec(title="評価期間管理", icon="⚙️"))

render()
