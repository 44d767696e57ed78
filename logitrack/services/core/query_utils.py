from sqlalchemy.sql.elements import ColumnElement


class QueryUtils:
    """Helper per la costruzione dei filtri di ricerca"""

    LIKE_ESCAPE = "\\"

    @staticmethod
    def escape_like(value: str) -> str:
        """Neutralizza i caratteri jolly di LIKE presenti nel testo cercato"""
        escape = QueryUtils.LIKE_ESCAPE
        return value.replace(escape, escape * 2).replace("%", f"{escape}%").replace("_", f"{escape}_")

    @staticmethod
    def ilike_contains(column, value: str) -> ColumnElement:
        """Match case-insensitive per sottostringa"""
        pattern = f"%{QueryUtils.escape_like(value.strip())}%"
        return column.ilike(pattern, escape=QueryUtils.LIKE_ESCAPE)
