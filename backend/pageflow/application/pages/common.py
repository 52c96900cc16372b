from pageflow.domain.exceptions import NotFound, ValidationError


def require_page(store, page_id):
    page = store.get_page(page_id)
    if page is None:
        raise NotFound("Page", page_id)
    return page


def require_text(data, field, *, allow_empty=False):
    value = data.get(field)
    if not isinstance(value, str):
        raise ValidationError(f"'{field}' must be a string", field=field)
    if not allow_empty and not value.strip():
        raise ValidationError(f"'{field}' is required", field=field)
    return value


def require_reason(reason):
    if not isinstance(reason, str) or not reason.strip():
        raise ValidationError("A rejection reason is required", field="reason")
    return reason.strip()


def optional_text(data, field, default=""):
    value = data.get(field)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValidationError(f"'{field}' must be a string", field=field)
    return value
