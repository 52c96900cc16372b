from pageflow.extensions import db
from pageflow.domain.records import NavigationLinkRecord
from .base import BaseModel


class NavigationLink(BaseModel):
    __tablename__ = "navigation_links"

    from_page_id = db.Column(db.String(36), db.ForeignKey("pages.id"), nullable=False, index=True)
    to_page_id = db.Column(db.String(36), db.ForeignKey("pages.id"), nullable=False, index=True)

    from_element_id = db.Column(db.Text, nullable=True)  # CSS selector or element id
    trigger_text = db.Column(db.Text, nullable=True)  # text of the clickable element
    link_type = db.Column(db.String(50), nullable=False, default="button")  # button, link, image, custom

    @classmethod
    def from_record(cls, record: NavigationLinkRecord) -> "NavigationLink":
        link = cls()
        link.id = record.id
        link.from_page_id = record.from_page_id
        link.to_page_id = record.to_page_id
        link.from_element_id = record.from_element_id
        link.trigger_text = record.trigger_text
        link.link_type = record.link_type
        link.created_at = record.created_at
        return link

    def to_record(self) -> NavigationLinkRecord:
        return NavigationLinkRecord(
            id=self.id,
            from_page_id=self.from_page_id,
            to_page_id=self.to_page_id,
            created_at=self.created_at,
            from_element_id=self.from_element_id,
            trigger_text=self.trigger_text,
            link_type=self.link_type,
        )
