# UI
APP_TITLE = "HR Evaluation"
APP_SUBTITLE = "人事評価システム"
PAGE_TITLE_PREFIX = "HR Evaluation - "
LOADING_TEXT = "読み込み中..."
