"""Tests for ResourceHandlerRegistration — the builder and its build step."""

from dataclasses import dataclass

import pytest

from roost.config import ResourceConfig
from roost.errors import (
    ConfigurationError,
    IncompleteRegistrationError,
    InvalidRegistrationError,
)
from roost.resources.registration import ResourceHandlerRegistration
from roost.resources.resolvers import PathResourceResolver


@dataclass(frozen=True)
class StubResource:
    location: str


class RecordingLoader:
    """Loader that returns a stub per location and records the calls."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def get_resource(self, location: str) -> StubResource:
        self.calls.append(location)
        return StubResource(location)


class NamedResolver:
    def __init__(self, name: str) -> None:
        self.name = name

    def resolve_resource(self, request, request_path, locations, chain):
        return chain.resolve_resource(request, request_path, locations)

    def resolve_url_path(self, resource_path, locations, chain):
        return chain.resolve_url_path(resource_path, locations)


class NamedTransformer:
    def __init__(self, name: str) -> None:
        self.name = name

    def transform(self, request, resource, chain):
        return chain.transform(request, resource)


class TestConstruction:
    def test_requires_a_path_pattern(self) -> None:
        with pytest.raises(InvalidRegistrationError, match="At least one path pattern"):
            ResourceHandlerRegistration(RecordingLoader())

    def test_missing_pattern_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            ResourceHandlerRegistration(RecordingLoader())

    def test_rejects_empty_pattern(self) -> None:
        with pytest.raises(InvalidRegistrationError):
            ResourceHandlerRegistration(RecordingLoader(), "/resources/**", "")

    def test_path_patterns_are_kept_in_order(self) -> None:
        reg = ResourceHandlerRegistration(RecordingLoader(), "/resources/**", "/favicon.ico")
        assert reg.path_patterns == ("/resources/**", "/favicon.ico")

    def test_path_patterns_are_immutable(self) -> None:
        reg = ResourceHandlerRegistration(RecordingLoader(), "/resources/**")
        with pytest.raises(AttributeError):
            reg.path_patterns = ("/other/**",)  # type: ignore[misc]

    def test_nothing_configured_initially(self) -> None:
        reg = ResourceHandlerRegistration(RecordingLoader(), "/resources/**")
        assert reg.locations == ()
        assert reg.cache_period is None
        assert reg.resource_resolvers is None
        assert reg.resource_transformers is None


class TestLocations:
    def test_locations_resolved_through_loader(self) -> None:
        loader = RecordingLoader()
        reg = ResourceHandlerRegistration(loader, "/resources/**")
        reg.add_resource_locations("/public/", "classpath:/static/")
        assert loader.calls == ["/public/", "classpath:/static/"]

    def test_locations_append_across_calls_in_order(self) -> None:
        reg = ResourceHandlerRegistration(RecordingLoader(), "/resources/**")
        reg.add_resource_locations("/a/").add_resource_locations("/b/", "/c/")
        assert [r.location for r in reg.locations] == ["/a/", "/b/", "/c/"]

    def test_duplicate_locations_are_kept(self) -> None:
        reg = ResourceHandlerRegistration(RecordingLoader(), "/resources/**")
        reg.add_resource_locations("/a/", "/a/")
        assert len(reg.locations) == 2

    def test_chaining_returns_same_instance(self) -> None:
        reg = ResourceHandlerRegistration(RecordingLoader(), "/resources/**")
        assert reg.add_resource_locations("/a/") is reg
        assert reg.set_cache_period(10) is reg
        assert reg.set_resource_resolvers() is reg
        assert reg.set_resource_transformers() is reg


class TestStrategies:
    def test_set_resolvers_replaces(self) -> None:
        first, second, third = NamedResolver("1"), NamedResolver("2"), NamedResolver("3")
        reg = ResourceHandlerRegistration(RecordingLoader(), "/resources/**")
        reg.set_resource_resolvers(first, second)
        reg.set_resource_resolvers(third)
        assert reg.resource_resolvers == (third,)

    def test_set_transformers_replaces(self) -> None:
        first, second = NamedTransformer("1"), NamedTransformer("2")
        reg = ResourceHandlerRegistration(RecordingLoader(), "/resources/**")
        reg.set_resource_transformers(first)
        reg.set_resource_transformers(second)
        assert reg.resource_transformers == (second,)

    def test_empty_resolver_list_is_explicit(self) -> None:
        reg = ResourceHandlerRegistration(RecordingLoader(), "/resources/**")
        reg.set_resource_resolvers()
        assert reg.resource_resolvers == ()

    def test_resolver_list_cannot_be_appended_to(self) -> None:
        reg = ResourceHandlerRegistration(RecordingLoader(), "/resources/**")
        reg.set_resource_resolvers(NamedResolver("1"))
        with pytest.raises(AttributeError):
            reg.resource_resolvers.append(NamedResolver("2"))  # type: ignore[union-attr]


class TestCachePeriod:
    def test_stores_value(self) -> None:
        reg = ResourceHandlerRegistration(RecordingLoader(), "/resources/**")
        assert reg.set_cache_period(3600).cache_period == 3600

    def test_zero_is_allowed(self) -> None:
        reg = ResourceHandlerRegistration(RecordingLoader(), "/resources/**")
        assert reg.set_cache_period(0).cache_period == 0

    def test_can_be_reset_to_none(self) -> None:
        reg = ResourceHandlerRegistration(RecordingLoader(), "/resources/**")
        reg.set_cache_period(60).set_cache_period(None)
        assert reg.cache_period is None

    def test_negative_is_stored(self) -> None:
        reg = ResourceHandlerRegistration(RecordingLoader(), "/resources/**")
        assert reg.set_cache_period(-1).cache_period == -1

    def test_negative_is_injected(self) -> None:
        handler = (
            ResourceHandlerRegistration(RecordingLoader(), "/r/**")
            .add_resource_locations("/public/")
            .set_cache_period(-1)
            .get_request_handler()
        )
        assert handler.cache_seconds == -1


class TestGetRequestHandler:
    def test_requires_a_location(self) -> None:
        reg = ResourceHandlerRegistration(RecordingLoader(), "/resources/**")
        with pytest.raises(IncompleteRegistrationError, match="At least one location"):
            reg.get_request_handler()

    def test_missing_location_is_a_configuration_error(self) -> None:
        reg = ResourceHandlerRegistration(RecordingLoader(), "/resources/**").set_cache_period(5)
        with pytest.raises(ConfigurationError):
            reg.get_request_handler()

    def test_unset_fields_keep_handler_defaults(self) -> None:
        reg = ResourceHandlerRegistration(RecordingLoader(), "/resources/**")
        handler = reg.add_resource_locations("/public/").get_request_handler()

        assert len(handler.resource_resolvers) == 1
        assert isinstance(handler.resource_resolvers[0], PathResourceResolver)
        assert handler.resource_transformers == ()
        assert handler.cache_seconds is None

    def test_configured_fields_are_injected(self) -> None:
        resolver = NamedResolver("custom")
        transformer = NamedTransformer("custom")
        handler = (
            ResourceHandlerRegistration(RecordingLoader(), "/resources/**")
            .add_resource_locations("/public/", "classpath:/static/")
            .set_resource_resolvers(resolver)
            .set_resource_transformers(transformer)
            .set_cache_period(3600)
            .get_request_handler()
        )

        assert [r.location for r in handler.locations] == ["/public/", "classpath:/static/"]
        assert handler.resource_resolvers == (resolver,)
        assert handler.resource_transformers == (transformer,)
        assert handler.cache_seconds == 3600

    def test_zero_cache_period_is_injected(self) -> None:
        handler = (
            ResourceHandlerRegistration(RecordingLoader(), "/r/**")
            .add_resource_locations("/public/")
            .set_cache_period(0)
            .get_request_handler()
        )
        assert handler.cache_seconds == 0

    def test_unset_cache_period_falls_back_to_config_default(self) -> None:
        config = ResourceConfig(default_cache_period=120)
        handler = (
            ResourceHandlerRegistration(RecordingLoader(), "/r/**", config=config)
            .add_resource_locations("/public/")
            .get_request_handler()
        )
        assert handler.cache_seconds == 120

    def test_each_call_builds_a_fresh_handler(self) -> None:
        reg = ResourceHandlerRegistration(RecordingLoader(), "/r/**").add_resource_locations("/a/")
        assert reg.get_request_handler() is not reg.get_request_handler()

    def test_handler_locations_are_a_snapshot(self) -> None:
        reg = ResourceHandlerRegistration(RecordingLoader(), "/r/**").add_resource_locations("/a/")
        handler = reg.get_request_handler()
        reg.add_resource_locations("/b/")
        assert len(handler.locations) == 1
