from fastapi import Depends
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.app.services.notification_service import NotificationService
from src.app.use_cases.invoices import InvoiceService
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.services.notification_service import create_notification_service
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork

engine = create_async_engine(ApplicationConfig.DB_URI, echo=ApplicationConfig.DB_ECHO, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

notification_service = create_notification_service(
    ApplicationConfig.NOTIFICATION_WEBHOOK_URL,
    timeout=ApplicationConfig.NOTIFICATION_TIMEOUT_SECONDS,
)


async def init_db():
    """Create invoice tables if they do not exist"""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


def get_notification_service() -> NotificationService:
    return notification_service


def get_invoice_service(
    session: AsyncSession = Depends(get_session),
    notifier: NotificationService = Depends(get_notification_service),
) -> InvoiceService:
    return InvoiceService(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        notification_service=notifier,
    )
