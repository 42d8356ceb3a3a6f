from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    pdf_font_path: str | None = None
    pdf_font_regular_path: str | None = None
    pdf_font_bold_path: str | None = None

    # Brand blue used whenever a client has no accent or an unparsable one.
    pdf_default_accent_hex: str = "#1F5FB8"
    pdf_locale: str = "en_US"
    pdf_currency: str = "USD"
    pdf_date_style: str = "short"
    pdf_creator: str = "InvoiceGenerator"
    pdf_theme: str = "invoice-classic"

    # Directory for saved invoices; the user's Documents folder when unset.
    pdf_save_directory: str | None = None

    log_level: str = "info"

    @property
    def pdf_regular_font_path(self) -> str | None:
        return self.pdf_font_regular_path or self.pdf_font_path


settings = Settings()
