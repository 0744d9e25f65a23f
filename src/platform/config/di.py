"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.rental.domain.value_object.rental_pricing import RentalPricing
from src.service.rental.driven_adapter.repo.reservation_query_repo_impl import (
    ReservationQueryRepoImpl,
)


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (uses AsyncEngineManager with settings from config_service)
    database = providers.Singleton(Database)

    # Fee policy, ratios come from settings
    rental_pricing = providers.Singleton(
        RentalPricing,
        daily_rate_ratio=config_service.provided.DAILY_RATE_RATIO,
        late_fee_ratio=config_service.provided.LATE_FEE_RATIO,
    )

    # Command side: one session per unit of work, new UoW per request
    unit_of_work = providers.Factory(
        SqlAlchemyUnitOfWork, session_factory=database.provided.session
    )

    # Query side (stateless - use session_factory per call)
    reservation_query_repo = providers.Singleton(
        ReservationQueryRepoImpl, session_factory=database.provided.session
    )


container = Container()
