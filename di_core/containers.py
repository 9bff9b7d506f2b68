import importlib
import pkgutil
from collections.abc import Iterator
from types import ModuleType

from dependency_injector import containers, providers

from accounts.services import IdentityService
from accounts.webhook_validators import SvixWebhookValidator
from activities.services import ActivityService
from events.services import EventService
from groups.services import GroupService


class AppContainer(containers.DeclarativeContainer):
    config = providers.Configuration()

    identity_service = providers.Factory(
        IdentityService,
    )

    webhook_validator = providers.Factory(
        SvixWebhookValidator,
        secret=config.IDENTITY_PROVIDER_WEBHOOK_SECRET,
        tolerance_seconds=config.IDENTITY_PROVIDER_WEBHOOK_TOLERANCE_SECONDS,
    )

    activity_service = providers.Factory(
        ActivityService,
    )

    group_service = providers.Factory(
        GroupService,
        activity_service=activity_service,
    )

    event_service = providers.Factory(
        EventService,
    )


container: AppContainer | None = None  # set during app startup


# test helpers import test-only libraries
UNWIRED_MODULES = ("factories", "migrations", "tests")


def _wired_modules(packages: list[str]) -> Iterator[ModuleType]:
    for package_name in packages:
        package = importlib.import_module(package_name)
        yield package
        for module_info in pkgutil.iter_modules(package.__path__, prefix=f"{package_name}."):
            if module_info.name.rsplit(".", 1)[-1] in UNWIRED_MODULES:
                continue
            yield importlib.import_module(module_info.name)


def build_container(settings) -> AppContainer:
    """
    Builds the container from the Django settings and wires every internal app,
    so `Provide[...]` markers in their modules resolve to its providers.
    """
    app_container = AppContainer()
    app_container.config.from_dict(
        {name: getattr(settings, name) for name in dir(settings) if name.isupper()}
    )
    app_container.wire(
        modules=list(_wired_modules(getattr(settings, "INTERNAL_INSTALLED_APPS", [])))
    )
    return app_container
