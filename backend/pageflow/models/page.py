from pageflow.extensions import db
from pageflow.domain.lifecycle.page import PageState
from pageflow.domain.records import PageRecord
from .base import BaseModel

# Columns copied verbatim between the row and its record
PAGE_COLUMNS = (
    "name", "html", "css", "js", "page_type", "thumbnail",
    "submitted_at", "approved_at", "rejected_at", "publish_at", "expire_at",
    "approved_by", "rejection_reason",
)


class Page(BaseModel):
    __tablename__ = "pages"

    name = db.Column(db.String(200), nullable=False)
    state = db.Column(db.String(32), nullable=False, default=PageState.DRAFT.value, index=True)

    html = db.Column(db.Text, nullable=False)
    css = db.Column(db.Text, nullable=False, default="")
    js = db.Column(db.Text, nullable=False, default="")

    page_type = db.Column(db.String(50), nullable=False, default="custom")
    thumbnail = db.Column(db.Text, nullable=True)  # data URI or storage path

    submitted_at = db.Column(db.DateTime(timezone=True), nullable=True, index=True)
    approved_at = db.Column(db.DateTime(timezone=True), nullable=True)
    rejected_at = db.Column(db.DateTime(timezone=True), nullable=True)
    publish_at = db.Column(db.DateTime(timezone=True), nullable=True)
    expire_at = db.Column(db.DateTime(timezone=True), nullable=True)

    # actor of the last approve OR reject
    approved_by = db.Column(db.String(36), nullable=True)
    rejection_reason = db.Column(db.Text, nullable=True)

    @classmethod
    def from_record(cls, record: PageRecord) -> "Page":
        page = cls()
        page.id = record.id
        page.created_at = record.created_at
        page.apply(record)
        return page

    def apply(self, record: PageRecord) -> None:
        self.state = record.state.value
        for column in PAGE_COLUMNS:
            setattr(self, column, getattr(record, column))

    def to_record(self) -> PageRecord:
        return PageRecord(
            id=self.id,
            created_at=self.created_at,
            state=PageState(self.state),
            **{column: getattr(self, column) for column in PAGE_COLUMNS},
        )
