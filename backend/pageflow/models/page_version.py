from sqlalchemy import event
from pageflow.extensions import db
from pageflow.domain.lifecycle.page import PageState
from pageflow.domain.records import PageVersionRecord
from .base import BaseModel


class PageVersion(BaseModel):
    __tablename__ = "page_versions"

    # No foreign key: versions are kept for audit after their page is deleted
    page_id = db.Column(db.String(36), nullable=False)
    version_number = db.Column(db.Integer, nullable=False)

    name = db.Column(db.String(200), nullable=False)
    html = db.Column(db.Text, nullable=False)
    css = db.Column(db.Text, nullable=False)
    js = db.Column(db.Text, nullable=False)
    state = db.Column(db.String(32), nullable=False)

    change_description = db.Column(db.Text, nullable=True)
    created_by = db.Column(db.String(36), nullable=True)

    __table_args__ = (
        db.UniqueConstraint("page_id", "version_number", name="uq_page_version"),
        db.Index("idx_page_version_page", "page_id"),
    )

    @classmethod
    def from_record(cls, record: PageVersionRecord) -> "PageVersion":
        version = cls()
        version.id = record.id
        version.page_id = record.page_id
        version.version_number = record.version_number
        version.name = record.name
        version.html = record.html
        version.css = record.css
        version.js = record.js
        version.state = record.state.value
        version.change_description = record.change_description
        version.created_by = record.created_by
        version.created_at = record.created_at
        return version

    def to_record(self) -> PageVersionRecord:
        return PageVersionRecord(
            id=self.id,
            page_id=self.page_id,
            version_number=self.version_number,
            name=self.name,
            html=self.html,
            css=self.css,
            js=self.js,
            state=PageState(self.state),
            created_at=self.created_at,
            change_description=self.change_description,
            created_by=self.created_by,
        )


@event.listens_for(PageVersion, 'before_update')
@event.listens_for(PageVersion, 'before_delete')
def prevent_version_mutation(mapper, connection, target):
    raise RuntimeError("Page versions are immutable")
