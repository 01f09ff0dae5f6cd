APP_NAME = "task-board"

LANG_PACK = {
    "en": {
        "TITLE_DASHBOARD": "Projects",
        "TITLE_SEARCH": "Search",
        "TITLE_BOARD": "Board",
        "VIEW_FEATURES": "Features",
        "VIEW_STATUS": "Status",
        "VIEW_LABEL": "View: {view}",
        "EMPTY_PROJECTS": "No projects. Point TASK_BOARD_DATA at a board file.",
        "EMPTY_TREE": "No features or tasks in this project.",
        "EMPTY_BOARD": "No columns selected.",
        "EMPTY_COLUMN": "No features",
        "NO_TASKS": "No tasks",
        "SEARCH_QUERY": "Query: {query}",
        "SEARCH_HINT": "Type to search • ↑/↓ move • Enter open • Esc back",
        "SEARCH_EMPTY_QUERY": "Start typing to search projects, features and tasks.",
        "SEARCH_NO_RESULTS": "No results for \"{query}\".",
        "DETAIL_STATUS": "Status",
        "DETAIL_PRIORITY": "Priority",
        "DETAIL_FEATURE": "Feature",
        "DETAIL_SUMMARY": "Summary",
        "DETAIL_DESCRIPTION": "Description",
        "DETAIL_TASKS": "Tasks",
        "DETAIL_PROGRESS": "{completed}/{total} done",
        "FILTER_LABEL": "Columns:",
        "STATUS_RELOADED": "Reloaded",
        "STATUS_NOT_FOUND": "Not found: {id}",
        "STATUS_MOVED": "{name} → {status}",
        "STATUS_MOVE_EDGE": "No column in that direction",
        "STATUS_ERROR": "Error: {error}",
        "HINT_DASHBOARD": "↑/↓ move • Enter open • / search • r reload • q quit",
        "HINT_TREE": "↑/↓ move • ←/→ collapse/expand • Enter toggle/open • v view • b board • e/c expand/collapse all • z fold branch • / search • Esc back",
        "HINT_BOARD": "←/→ columns • ↑/↓ features • Enter expand • </> move • f filter • b tree • Esc back",
        "HINT_BOARD_TASKS": "↑/↓ tasks • Enter open task • Esc collapse",
        "HINT_BOARD_FILTER": "←/→ chips • Space toggle • Esc done",
        "HINT_DETAIL": "↑/↓ scroll • Esc back",
        "HINT_FEATURE_DETAIL": "↑/↓ move • Enter open task • Esc back",
        "HINT_SEARCH": "↑/↓ move • Enter open • Esc back",
    },
    "ru": {
        "TITLE_DASHBOARD": "Проекты",
        "TITLE_SEARCH": "Поиск",
        "TITLE_BOARD": "Доска",
        "VIEW_FEATURES": "Фичи",
        "VIEW_STATUS": "Статусы",
        "VIEW_LABEL": "Вид: {view}",
        "EMPTY_PROJECTS": "Нет проектов. Укажи файл доски через TASK_BOARD_DATA.",
        "EMPTY_TREE": "В проекте нет фич и задач.",
        "EMPTY_BOARD": "Не выбрано ни одной колонки.",
        "EMPTY_COLUMN": "Нет фич",
        "NO_TASKS": "Нет задач",
        "SEARCH_QUERY": "Запрос: {query}",
        "SEARCH_HINT": "Печатай для поиска • ↑/↓ выбор • Enter открыть • Esc назад",
        "SEARCH_EMPTY_QUERY": "Начни печатать, чтобы искать проекты, фичи и задачи.",
        "SEARCH_NO_RESULTS": "Ничего не найдено по \"{query}\".",
        "DETAIL_STATUS": "Статус",
        "DETAIL_PRIORITY": "Приоритет",
        "DETAIL_FEATURE": "Фича",
        "DETAIL_SUMMARY": "Кратко",
        "DETAIL_DESCRIPTION": "Описание",
        "DETAIL_TASKS": "Задачи",
        "DETAIL_PROGRESS": "готово {completed}/{total}",
        "FILTER_LABEL": "Колонки:",
        "STATUS_RELOADED": "Обновлено",
        "STATUS_NOT_FOUND": "Не найдено: {id}",
        "STATUS_MOVE_EDGE": "В этом направлении колонок нет",
        "STATUS_ERROR": "Ошибка: {error}",
    },
}
