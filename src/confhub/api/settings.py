"""Settings controller for configuration entry CRUD.

Read endpoints are open to any authenticated caller; create, update,
update-by-key and delete carry the ``require_admin`` guard.
"""

from collections.abc import Mapping, Sequence

from litestar import Controller, Request, delete, get, patch, post, put
from litestar.di import NamedDependency, Provide
from litestar.types import AnyCallable
from sqlalchemy.ext.asyncio import AsyncSession

from confhub.api.schemas import (
    SettingRequest,
    SettingResponse,
    SettingValueUpdate,
    decode_body,
)
from confhub.core.auth import require_admin
from confhub.repositories.setting import SettingRepository
from confhub.services.settings import SettingsService, parse_setting_id


async def provide_setting_repository(
    session: NamedDependency[AsyncSession],
) -> SettingRepository:
    """Create SettingRepository from injected session."""
    return SettingRepository(session)


async def provide_settings_service(
    setting_repository: NamedDependency[SettingRepository],
) -> SettingsService:
    """Create SettingsService from injected dependencies."""
    return SettingsService(setting_repository)


class SettingsController(Controller):
    """Controller for configuration settings endpoints."""

    path: str = "/api/v1/settings"
    tags: Sequence[str] | None = ["Settings"]
    dependencies: Mapping[str, Provide | AnyCallable] | None = {
        "setting_repository": Provide(provide_setting_repository),
        "settings_service": Provide(provide_settings_service),
    }

    @get(
        "/",
        summary="List settings",
        description="Returns every setting ordered by category and key.",
    )
    async def list_settings(
        self,
        settings_service: NamedDependency[SettingsService],
    ) -> list[SettingResponse]:
        settings = await settings_service.list_settings()
        return [SettingResponse.from_model(s) for s in settings]

    @get(
        "/category/{category:str}",
        summary="List settings in a category",
        description="Returns settings whose category matches exactly.",
    )
    async def get_by_category(
        self,
        category: str,
        settings_service: NamedDependency[SettingsService],
    ) -> list[SettingResponse]:
        settings = await settings_service.get_by_category(category)
        return [SettingResponse.from_model(s) for s in settings]

    @get(
        "/key/{key:str}",
        summary="Get setting by key",
    )
    async def get_by_key(
        self,
        key: str,
        settings_service: NamedDependency[SettingsService],
    ) -> SettingResponse:
        setting = await settings_service.get_by_key(key)
        return SettingResponse.from_model(setting)

    @get(
        "/{setting_id:str}",
        summary="Get setting by id",
    )
    async def get_setting(
        self,
        setting_id: str,
        settings_service: NamedDependency[SettingsService],
    ) -> SettingResponse:
        setting = await settings_service.get(parse_setting_id(setting_id))
        return SettingResponse.from_model(setting)

    @post(
        "/",
        guards=[require_admin],
        summary="Create setting",
        description="Creates a setting. Fails with 409 if the key is already taken.",
    )
    async def create_setting(
        self,
        data: SettingRequest,
        settings_service: NamedDependency[SettingsService],
    ) -> SettingResponse:
        setting = await settings_service.create(
            key=data.key,
            value=data.value,
            category=data.category,
            description=data.description,
            requires_restart=data.requires_restart,
            requires_db_reset=data.requires_db_reset,
        )
        return SettingResponse.from_model(setting)

    @put(
        "/{setting_id:str}",
        guards=[require_admin],
        summary="Replace setting",
        description="Replaces every mutable field of the setting with the given id.",
    )
    async def update_setting(
        self,
        setting_id: str,
        request: Request,
        settings_service: NamedDependency[SettingsService],
    ) -> SettingResponse:
        """Replace a setting.

        The body is decoded only once the id resolves, so an unknown id is a
        404 whatever the body holds.
        """
        target_id = parse_setting_id(setting_id)
        _ = await settings_service.get(target_id)
        data = decode_body(await request.body(), SettingRequest)

        setting = await settings_service.update(
            target_id,
            key=data.key,
            value=data.value,
            category=data.category,
            description=data.description,
            requires_restart=data.requires_restart,
            requires_db_reset=data.requires_db_reset,
        )
        return SettingResponse.from_model(setting)

    @patch(
        "/{key:str}",
        guards=[require_admin],
        summary="Update setting value by key",
        description="Changes only the value of the setting with the given key.",
    )
    async def update_setting_value(
        self,
        key: str,
        request: Request,
        settings_service: NamedDependency[SettingsService],
    ) -> SettingResponse:
        _ = await settings_service.get_by_key(key)
        data = decode_body(await request.body(), SettingValueUpdate)

        setting = await settings_service.update_value(key, data.value)
        return SettingResponse.from_model(setting)

    @delete(
        "/{setting_id:str}",
        guards=[require_admin],
        summary="Delete setting",
    )
    async def delete_setting(
        self,
        setting_id: str,
        settings_service: NamedDependency[SettingsService],
    ) -> None:
        await settings_service.delete(parse_setting_id(setting_id))
