from pydantic import BaseModel


class Pagination(BaseModel):
    page: int
    page_size: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @classmethod
    def from_request(cls, page: int, page_size: int, default_page_size: int = 20) -> "Pagination":
        # Страницы нумеруются с 1; верхней границы для page_size нет
        return cls(
            page=page if page > 0 else 1,
            page_size=page_size if page_size > 0 else default_page_size,
        )
