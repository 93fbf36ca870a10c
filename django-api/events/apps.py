"""Events app configuration."""

from django.apps import AppConfig


class EventsConfig(AppConfig):
    """Configuration for the events app.

    Builds the service container once, when the app registry is ready.
    """

    default_auto_field = "django.db.models.BigAutoField"
    name = "events"
    verbose_name = "Event Listings"

    def ready(self) -> None:
        from events.container import build_services
        from events.stores import Database

        self.services = build_services(Database())
