import datetime as dt

from sqlalchemy import inspect


def to_json_value(value):
    if isinstance(value, (dt.datetime, dt.date)):
        return value.isoformat()
    return value


def row_to_dict(obj, exclude: tuple[str, ...] = ()) -> dict:
    """Column values of an ORM row keyed by column name (``meta`` is exposed as ``metadata``)."""
    out = {}
    for attr in inspect(obj).mapper.column_attrs:
        name = attr.columns[0].name
        if name in exclude:
            continue
        out[name] = to_json_value(getattr(obj, attr.key))
    return out
