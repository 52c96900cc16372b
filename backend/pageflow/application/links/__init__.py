from .manage_links import create_link, delete_link, get_links, get_links_by_page

__all__ = ["create_link", "delete_link", "get_links", "get_links_by_page"]
