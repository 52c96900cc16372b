from .page import Page
from .page_version import PageVersion
from .navigation_link import NavigationLink
from .audit_log import AuditLog
from .user import User

__all__ = ["Page", "PageVersion", "NavigationLink", "AuditLog", "User"]
