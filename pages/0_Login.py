from hreval.web.framework.page import init_page, PageSpec
from hreval.web.pages_impl.login import render

# MUST be the first Streamlit command on this page
init_page(PageSpec(title="ログイン", icon="🔑", layout="centered", sidebar_state="collapsed"))

render()
