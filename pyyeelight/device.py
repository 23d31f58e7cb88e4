"""Session layer for a single Yeelight device.

This module provides:
- Connection management with best-effort reconnect
- A background receive loop correlating responses by request id
- Property store kept current by notifications
- Music mode (the device dials back into a local TCP server)
- Typed command methods

Uses the transport layer for socket operations and the protocol layer
for encoding and decoding.
"""

from __future__ import annotations

import asyncio
import logging
import socket
import threading
from contextlib import suppress
from typing import Any, Callable, Iterable, Mapping, Sequence

from . import commands
from .config import DeviceConfig
from .const import (
    DEFAULT_MUSIC_PORT,
    DEFAULT_PORT,
    MAX_PROPS_PER_REQUEST,
    MAX_REQUEST_ID,
    POLL_INTERVAL,
    POWER_OFF,
    POWER_ON,
)
from .exceptions import (
    YeelightConnectionFailed,
    YeelightConnectionLost,
    YeelightException,
    YeelightInvalidOperation,
    YeelightMethodNotSupported,
    YeelightNotConnected,
    YeelightProtocolError,
    YeelightRequestTimeout,
)
from .messages import (
    AnyMessage,
    CommandResult,
    CronResult,
    NotificationMessage,
    ResponseMessage,
    parse_cron_results,
)
from .methods import (
    ALL_PROPERTIES,
    AdjustAction,
    AdjustProperty,
    CronType,
    FlowEndAction,
    LightType,
    Method,
    MusicAction,
    PowerOnMode,
    Property,
    parse_method,
    parse_supported_methods,
    property_name,
)
from .models import ConnectionHealth, PropertyStore, SessionState
from .pending import PendingRequestTable, ResultConverter
from .protocol import MessageParser, encode_command
from .transport import YeelightTransport

_LOGGER = logging.getLogger(__name__)

# Callback types
NotificationCallback = Callable[[NotificationMessage], None]
ErrorCallback = Callable[[Exception], None]


def get_local_address(target_host: str) -> str:
    """Return the local IP address used to reach target_host.

    Connecting a UDP socket sends nothing; it only selects the route.
    """
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.connect((target_host, 80))
        return sock.getsockname()[0]


def _for_light(prop: Property, light_type: LightType) -> Property:
    if light_type == LightType.BACKGROUND:
        return Property(f"bg_{prop.value}")
    return prop


class YeelightDevice:
    """Session with one Yeelight device.

    This class provides:
    - Fire-and-forget commands (execute_command)
    - Commands awaiting a correlated response (execute_command_with_response)
    - A property store updated by notifications
    - Music mode

    Example:
        def on_notification(msg):
            print(f"Changed: {msg.params}")

        async with YeelightDevice("192.168.1.50") as bulb:
            bulb.add_notification_listener(on_notification)
            await bulb.set_brightness(40, smooth=500)
    """

    def __init__(
        self,
        hostname: str,
        port: int = DEFAULT_PORT,
        *,
        device_id: str | None = None,
        model: str | None = None,
        firmware_version: str | None = None,
        properties: Mapping[str, Any] | None = None,
        supported_methods: Iterable[Method | str] | str | None = None,
        notification_callback: NotificationCallback | None = None,
        error_callback: ErrorCallback | None = None,
        poll_interval: float = POLL_INTERVAL,
        request_timeout: float | None = None,
    ) -> None:
        """Initialize the session. Nothing is connected until connect().

        Args:
            hostname: Device hostname or IP
            port: Device control port
            device_id: Device id from discovery
            model: Model name from discovery
            firmware_version: Firmware version from discovery
            properties: Initial property values
            supported_methods: Methods the device accepts; empty allows all
            notification_callback: Called with every notification
            error_callback: Called with non-fatal receive loop errors
            poll_interval: Receive loop tick in seconds
            request_timeout: Default response timeout, None waits forever
        """
        self._hostname = hostname
        self._port = port
        self.id = device_id
        self.model = model
        self.firmware_version = firmware_version

        self._properties = PropertyStore(properties)
        self._supported_methods = parse_supported_methods(supported_methods)
        self._pending = PendingRequestTable()
        self._parser = MessageParser(error_callback=self._report_error)
        self._health = ConnectionHealth()

        self._poll_interval = poll_interval
        self._request_timeout = request_timeout

        self._transport: YeelightTransport | None = None
        self._watch_task: asyncio.Task | None = None
        self._send_lock = asyncio.Lock()
        self._id_lock = threading.Lock()
        self._request_id = 0
        self._music_mode = False
        self._connecting = False

        self._notification_listeners: list[NotificationCallback] = []
        self._error_listeners: list[ErrorCallback] = []
        if notification_callback:
            self._notification_listeners.append(notification_callback)
        if error_callback:
            self._error_listeners.append(error_callback)

    @classmethod
    def from_config(cls, config: DeviceConfig, **kwargs: Any) -> "YeelightDevice":
        """Create a session from a validated DeviceConfig."""
        return cls(
            config.host,
            config.port,
            device_id=config.device_id,
            model=config.model,
            firmware_version=config.firmware_version,
            supported_methods=config.supported_methods,
            poll_interval=config.poll_interval,
            request_timeout=config.request_timeout,
            **kwargs,
        )

    def __str__(self) -> str:
        """Return a readable description."""
        return f"{self.model or 'yeelight'} ({self._hostname}:{self._port})"

    def __repr__(self) -> str:
        """Return a debug description."""
        return f"<YeelightDevice {self._hostname}:{self._port} state={self.state.value}>"

    async def __aenter__(self) -> "YeelightDevice":
        """Connect on entering an async with block."""
        if not await self.connect():
            await self.disconnect()
            raise YeelightConnectionFailed(f"Could not connect to {self}")
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        """Disconnect on leaving an async with block."""
        await self.disconnect()

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def hostname(self) -> str:
        """Return host."""
        return self._hostname

    @property
    def port(self) -> int:
        """Return port."""
        return self._port

    @property
    def connected(self) -> bool:
        """Return True if a transport exists and reports itself connected."""
        return self._transport is not None and self._transport.connected

    @property
    def is_music_mode_enabled(self) -> bool:
        """Return True while music mode is active."""
        return self._music_mode

    @property
    def state(self) -> SessionState:
        """Return the lifecycle state."""
        if self._connecting:
            return SessionState.CONNECTING
        if self._transport is None:
            return SessionState.DISCONNECTED
        if not self._transport.connected:
            # The receive loop is reconnecting
            return SessionState.CONNECTING
        if self._music_mode:
            return SessionState.MUSIC_MODE
        return SessionState.CONNECTED

    @property
    def supported_methods(self) -> list[Method]:
        """Return the allow-list (empty means unknown, allow all)."""
        return list(self._supported_methods)

    @property
    def properties(self) -> dict[str, Any]:
        """Return a snapshot of the last known properties."""
        return self._properties.snapshot()

    @property
    def health(self) -> ConnectionHealth:
        """Return health metrics."""
        return self._health

    @property
    def name(self) -> str:
        """Return the device name, as last known."""
        return self._properties.get(Property.NAME) or "<unknown>"

    @name.setter
    def name(self, value: str) -> None:
        self._properties.set(Property.NAME, value)

    def __getitem__(self, prop: Property | str) -> Any:
        """Return the last known value of a property, or None."""
        return self._properties.get(prop)

    def __setitem__(self, prop: Property | str, value: Any) -> None:
        """Overwrite a property locally (no command is sent)."""
        self._properties.set(prop, value)

    def is_method_supported(self, method: Method | str) -> bool:
        """Return True if the device accepts the method."""
        if not self._supported_methods:
            return True
        return parse_method(method) in self._supported_methods

    # =========================================================================
    # Events
    # =========================================================================

    def add_notification_listener(
        self, callback: NotificationCallback
    ) -> Callable[[], None]:
        """Register a notification listener.

        Returns:
            Function that removes the listener
        """
        self._notification_listeners.append(callback)

        def remove() -> None:
            with suppress(ValueError):
                self._notification_listeners.remove(callback)

        return remove

    def add_error_listener(self, callback: ErrorCallback) -> Callable[[], None]:
        """Register an error listener.

        Returns:
            Function that removes the listener
        """
        self._error_listeners.append(callback)

        def remove() -> None:
            with suppress(ValueError):
                self._error_listeners.remove(callback)

        return remove

    def _report_error(self, error: Exception) -> None:
        self._health.record_error(error)
        for listener in list(self._error_listeners):
            try:
                listener(error)
            except Exception:  # noqa: BLE001
                _LOGGER.exception("Error callback failed")

    def _notify(self, message: NotificationMessage) -> None:
        for listener in list(self._notification_listeners):
            try:
                listener(message)
            except Exception:  # noqa: BLE001
                _LOGGER.exception("Notification callback failed")

    # =========================================================================
    # Connection
    # =========================================================================

    async def connect(self) -> bool:
        """Connect to the device and sync all properties.

        Any previous connection is closed first.

        Returns:
            True if the socket connected and the property sync succeeded
        """
        await self.disconnect()
        self._connecting = True
        try:
            transport = YeelightTransport(self._hostname, self._port)
            try:
                await transport.connect()
            except YeelightConnectionFailed as err:
                _LOGGER.error("Connection failed: %s", err)
                return False

            self._transport = transport
            self._health.record_connect()
            self._start_watch()

            try:
                properties = await self.get_all_props()
            except YeelightException as err:
                _LOGGER.error("Property sync with %s failed: %s", self, err)
                return False

            if properties is None:
                _LOGGER.warning("Property sync with %s returned nothing", self)
                return False

            self._properties.update(properties)
            return True
        finally:
            self._connecting = False

    async def disconnect(self) -> None:
        """Close the connection and cancel every pending request.

        Safe to call when already disconnected.
        """
        await self._teardown()
        self._music_mode = False

    async def _teardown(self) -> None:
        transport = self._transport
        self._transport = None

        task = self._watch_task
        self._watch_task = None
        if task is not None and task is not asyncio.current_task():
            task.cancel()
            with suppress(asyncio.CancelledError):
                await task

        if transport is not None:
            await transport.close()
            _LOGGER.info("Disconnected from %s", self)

        canceled = self._pending.cancel_all()
        if canceled:
            _LOGGER.debug("Canceled %d pending requests for %s", canceled, self)
        self._parser.reset()

    def _start_watch(self) -> None:
        self._watch_task = asyncio.create_task(
            self._watch(), name=f"yeelight-watch-{self._hostname}"
        )

    async def _watch(self) -> None:
        """Receive loop: read, decode and dispatch until disconnected."""
        while self._transport is not None:
            transport = self._transport

            if not transport.connected:
                if self._music_mode:
                    # The device leaves music mode when its connection drops
                    _LOGGER.warning("Music mode connection to %s dropped", self)
                    self._music_mode = False
                await self._reconnect(transport)
                if not transport.connected:
                    await asyncio.sleep(self._poll_interval)
                    continue

            try:
                data = await transport.read(timeout=self._poll_interval)
            except YeelightConnectionLost as err:
                _LOGGER.warning("Connection to %s lost: %s", self, err)
                self._parser.reset()
                await transport.close()
                continue

            if not data:
                continue

            for message in self._parser.feed(data):
                try:
                    self._dispatch(message)
                except Exception as err:  # noqa: BLE001
                    _LOGGER.warning("Failed to handle message from %s: %s", self, err)
                    self._report_error(err)

    async def _reconnect(self, transport: YeelightTransport) -> None:
        async with self._send_lock:
            if transport is not self._transport or transport.connected:
                return
            try:
                await transport.connect()
            except YeelightConnectionFailed as err:
                _LOGGER.debug("Reconnect to %s failed: %s", self, err)
                return

        self._health.record_reconnect()

    def _dispatch(self, message: AnyMessage) -> None:
        self._health.record_message()

        if isinstance(message, ResponseMessage):
            if message.id == 0:
                _LOGGER.debug("Ignoring response with reserved id 0: %s", message.raw)
                return
            if message.error is not None:
                found = self._pending.fulfill_error(message.id, message.error)
            else:
                found = self._pending.fulfill_success(message.id, message.result)
            if not found:
                _LOGGER.debug("No pending request %d, dropping response", message.id)
            return

        self._properties.update(message.params)
        self._health.record_notification()
        self._notify(message)

    # =========================================================================
    # Command execution
    # =========================================================================

    def _next_request_id(self) -> int:
        with self._id_lock:
            self._request_id = self._request_id % MAX_REQUEST_ID + 1
            return self._request_id

    def _check_usage(self, method: Method | str) -> Method:
        method = parse_method(method)
        if not self.is_method_supported(method):
            raise YeelightMethodNotSupported(
                f"The operation {method.value} is not allowed by the device"
            )
        if not self.connected:
            raise YeelightNotConnected(f"Not connected to {self}")
        return method

    async def _send(
        self, method: Method | str, request_id: int, params: Sequence[Any] | None
    ) -> bool:
        method = self._check_usage(method)
        data = encode_command(request_id, method, params or ())
        async with self._send_lock:
            transport = self._transport
            if transport is None:
                return False
            return await transport.write(data)

    async def execute_command(
        self, method: Method | str, params: Sequence[Any] | None = None
    ) -> bool:
        """Send a command without waiting for its response.

        Args:
            method: Method enum member or wire name
            params: Ordered parameters

        Returns:
            True if the command was written

        Raises:
            YeelightMethodNotSupported: If the device does not allow the method
            YeelightNotConnected: If the session is not connected
        """
        return await self._send(method, self._next_request_id(), params)

    async def execute_command_with_response(
        self,
        method: Method | str,
        params: Sequence[Any] | None = None,
        result_type: ResultConverter | None = None,
        *,
        request_id: int | None = None,
        timeout: float | None = None,
    ) -> CommandResult | None:
        """Send a command and wait for the correlated response.

        In music mode the device never answers, so a successful result
        with is_music_response set is returned as soon as the command is
        written.

        Args:
            method: Method enum member or wire name
            params: Ordered parameters
            result_type: Converter applied to the raw result list
            request_id: Explicit request id, normally assigned automatically
            timeout: Seconds to wait; None uses the session default, which
                waits forever unless configured

        Returns:
            The result (possibly carrying the device's error), or None if
            the write failed or the request was canceled by disconnect or
            by a newer request reusing its id

        Raises:
            YeelightMethodNotSupported: If the device does not allow the method
            YeelightNotConnected: If the session is not connected
            YeelightInvalidOperation: If request_id is the reserved id 0
            YeelightRequestTimeout: If a timeout was set and expired
        """
        if request_id == 0:
            raise YeelightInvalidOperation("Request id 0 is reserved")
        method = self._check_usage(method)
        if request_id is None:
            request_id = self._next_request_id()

        if self._music_mode:
            if not await self._send(method, request_id, params):
                return None
            return CommandResult(id=request_id, is_music_response=True)

        if timeout is None:
            timeout = self._request_timeout

        pending = self._pending.register(request_id, result_type)
        try:
            if not await self._send(method, request_id, params):
                return None
            waiter = asyncio.shield(pending.future)
            if timeout is None:
                return await waiter
            return await asyncio.wait_for(waiter, timeout)
        except asyncio.TimeoutError as err:
            raise YeelightRequestTimeout(
                f"No response to {method.value} (id {request_id}) within {timeout}s"
            ) from err
        except asyncio.CancelledError:
            if pending.cancelled:
                _LOGGER.debug("Request %d to %s was canceled", request_id, self)
                return None
            raise
        finally:
            self._pending.release(request_id, pending)

    async def _run(
        self,
        command: commands.Command,
        updates: Mapping[Property | str, Any] | None = None,
    ) -> bool:
        method, params = command
        result = await self.execute_command_with_response(method, params)
        ok = result is not None and result.is_ok()
        if ok and updates:
            self._properties.update(updates)
        return ok

    # =========================================================================
    # Readers
    # =========================================================================

    async def get_prop(self, prop: Property | str) -> Any:
        """Read a single property from the device.

        Returns:
            The value, or None if there was no usable answer
        """
        result = await self.execute_command_with_response(*commands.get_prop([prop]))
        if result is None or not isinstance(result.result, list):
            return None
        return result.result[0] if len(result.result) == 1 else None

    async def get_props(
        self, props: Iterable[Property | str]
    ) -> dict[str, Any] | None:
        """Read several properties, at most 20 per request.

        Returns:
            Mapping of property name to value, or None if a request got
            no usable answer

        Raises:
            YeelightProtocolError: If the device returns a different number
                of values than requested
        """
        names = [property_name(p) for p in props]
        values: list[Any] = []
        for start in range(0, len(names), MAX_PROPS_PER_REQUEST):
            chunk = names[start : start + MAX_PROPS_PER_REQUEST]
            result = await self.execute_command_with_response(*commands.get_prop(chunk))
            if (
                result is None
                or result.error is not None
                or not isinstance(result.result, list)
            ):
                return None
            values.extend(result.result)

        if len(values) != len(names):
            raise YeelightProtocolError(
                f"Requested {len(names)} properties, got {len(values)} values"
            )
        return dict(zip(names, values))

    async def get_all_props(self) -> dict[str, Any] | None:
        """Read every known property."""
        return await self.get_props(ALL_PROPERTIES)

    async def cron_get(
        self, cron_type: CronType = CronType.POWER_OFF
    ) -> CronResult | None:
        """Read a cron job."""
        method, params = commands.cron_get(cron_type)
        result = await self.execute_command_with_response(
            method, params, result_type=parse_cron_results
        )
        if result is None or not result.result:
            return None
        return result.result[0]

    # =========================================================================
    # Controller
    # =========================================================================

    async def set_power(
        self,
        state: bool = True,
        smooth: int | None = None,
        mode: PowerOnMode = PowerOnMode.NORMAL,
        light_type: LightType = LightType.MAIN,
    ) -> bool:
        """Switch the light on or off."""
        return await self._run(
            commands.set_power(state, smooth, mode, light_type),
            {_for_light(Property.POWER, light_type): POWER_ON if state else POWER_OFF},
        )

    async def turn_on(
        self,
        smooth: int | None = None,
        mode: PowerOnMode = PowerOnMode.NORMAL,
        light_type: LightType = LightType.MAIN,
    ) -> bool:
        """Switch the light on."""
        return await self.set_power(True, smooth, mode, light_type)

    async def turn_off(
        self, smooth: int | None = None, light_type: LightType = LightType.MAIN
    ) -> bool:
        """Switch the light off."""
        return await self.set_power(False, smooth, light_type=light_type)

    async def toggle(self, light_type: LightType = LightType.MAIN) -> bool:
        """Toggle the light."""
        power = _for_light(Property.POWER, light_type)
        updates = {}
        current = self._properties.get(power)
        if current in (POWER_ON, POWER_OFF):
            updates[power] = POWER_OFF if current == POWER_ON else POWER_ON
        return await self._run(commands.toggle(light_type), updates)

    async def dev_toggle(self) -> bool:
        """Toggle main and background light together."""
        return await self._run(commands.dev_toggle())

    async def set_brightness(
        self,
        value: int,
        smooth: int | None = None,
        light_type: LightType = LightType.MAIN,
    ) -> bool:
        """Set the brightness (1-100)."""
        return await self._run(
            commands.set_brightness(value, smooth, light_type),
            {_for_light(Property.BRIGHTNESS, light_type): str(value)},
        )

    async def set_rgb_color(
        self,
        r: int,
        g: int,
        b: int,
        smooth: int | None = None,
        light_type: LightType = LightType.MAIN,
    ) -> bool:
        """Set an RGB color."""
        command = commands.set_rgb_color(r, g, b, smooth, light_type)
        return await self._run(
            command, {_for_light(Property.RGB, light_type): str(command[1][0])}
        )

    async def set_hsv_color(
        self,
        hue: int,
        sat: int,
        smooth: int | None = None,
        light_type: LightType = LightType.MAIN,
    ) -> bool:
        """Set an HSV color."""
        return await self._run(
            commands.set_hsv_color(hue, sat, smooth, light_type),
            {
                _for_light(Property.HUE, light_type): str(hue),
                _for_light(Property.SATURATION, light_type): str(sat),
            },
        )

    async def set_color_temperature(
        self,
        temperature: int,
        smooth: int | None = None,
        light_type: LightType = LightType.MAIN,
    ) -> bool:
        """Set the color temperature in Kelvin."""
        return await self._run(
            commands.set_color_temperature(temperature, smooth, light_type),
            {_for_light(Property.COLOR_TEMPERATURE, light_type): str(temperature)},
        )

    async def set_default(self, light_type: LightType = LightType.MAIN) -> bool:
        """Save the current state as the power-on default."""
        return await self._run(commands.set_default(light_type))

    async def set_scene(
        self, scene: Sequence[Any], light_type: LightType = LightType.MAIN
    ) -> bool:
        """Apply a scene given as a pre-built parameter list."""
        return await self._run(commands.set_scene(scene, light_type))

    async def start_color_flow(
        self,
        count: int,
        end_action: FlowEndAction,
        expression: str,
        light_type: LightType = LightType.MAIN,
    ) -> bool:
        """Start a color flow from a pre-built expression."""
        return await self._run(
            commands.start_color_flow(count, end_action, expression, light_type)
        )

    async def stop_color_flow(self, light_type: LightType = LightType.MAIN) -> bool:
        """Stop the running color flow."""
        return await self._run(commands.stop_color_flow(light_type))

    async def set_adjust(
        self,
        action: AdjustAction,
        prop: AdjustProperty,
        light_type: LightType = LightType.MAIN,
    ) -> bool:
        """Step a property without knowing its current value."""
        return await self._run(commands.set_adjust(action, prop, light_type))

    async def adjust_brightness(
        self,
        percent: int,
        duration: int | None = None,
        light_type: LightType = LightType.MAIN,
    ) -> bool:
        """Change brightness by a relative percentage."""
        return await self._run(commands.adjust_brightness(percent, duration, light_type))

    async def adjust_color(
        self,
        percent: int,
        duration: int | None = None,
        light_type: LightType = LightType.MAIN,
    ) -> bool:
        """Change color by a relative percentage."""
        return await self._run(commands.adjust_color(percent, duration, light_type))

    async def adjust_color_temperature(
        self,
        percent: int,
        duration: int | None = None,
        light_type: LightType = LightType.MAIN,
    ) -> bool:
        """Change color temperature by a relative percentage."""
        return await self._run(
            commands.adjust_color_temperature(percent, duration, light_type)
        )

    async def cron_add(
        self, value: int, cron_type: CronType = CronType.POWER_OFF
    ) -> bool:
        """Add a cron job; value is the delay in minutes."""
        return await self._run(commands.cron_add(value, cron_type))

    async def cron_delete(self, cron_type: CronType = CronType.POWER_OFF) -> bool:
        """Delete a cron job."""
        return await self._run(commands.cron_delete(cron_type))

    async def set_name(self, name: str) -> bool:
        """Rename the device."""
        return await self._run(commands.set_name(name), {Property.NAME: name})

    # =========================================================================
    # Music mode
    # =========================================================================

    async def start_music_mode(
        self,
        host: str | None = None,
        port: int = DEFAULT_MUSIC_PORT,
        accept_timeout: float | None = None,
    ) -> bool:
        """Switch to music mode.

        A local TCP server is started and the device is asked to dial it.
        The inbound connection then replaces the control connection and
        commands stop getting responses.

        Args:
            host: Local address the device should dial, derived if omitted
            port: Local port, 0 picks a free one
            accept_timeout: Seconds to wait for the device, None waits forever

        Returns:
            True once the device connected back
        """
        if self._music_mode:
            return True
        if host is None:
            host = await asyncio.get_running_loop().run_in_executor(
                None, get_local_address, self._hostname
            )

        accepted: asyncio.Future[
            tuple[asyncio.StreamReader, asyncio.StreamWriter]
        ] = asyncio.get_running_loop().create_future()

        def on_connect(
            reader: asyncio.StreamReader, writer: asyncio.StreamWriter
        ) -> None:
            if accepted.done():
                writer.close()
                return
            accepted.set_result((reader, writer))

        server = await asyncio.start_server(on_connect, host, port)
        try:
            if not port:
                port = server.sockets[0].getsockname()[1]

            result = await self.execute_command_with_response(
                *commands.set_music(MusicAction.ON, host, port)
            )
            if result is None or not result.is_ok():
                return False

            self._music_mode = True
            await self._teardown()
            _LOGGER.info("Waiting for %s to connect to %s:%s", self, host, port)
            try:
                reader, writer = await asyncio.wait_for(accepted, accept_timeout)
            except asyncio.TimeoutError:
                _LOGGER.warning("%s did not connect back for music mode", self)
                await self.connect()
                return False

            self._transport = YeelightTransport.from_streams(
                self._hostname, self._port, reader, writer
            )
            self._start_watch()
            _LOGGER.info("Music mode enabled on %s", self)
            return True
        finally:
            # Only stops listening, the accepted connection stays open
            server.close()

    async def stop_music_mode(self) -> bool:
        """Leave music mode and reconnect normally.

        Returns:
            True if the device accepted and the new connection synced
        """
        result = await self.execute_command_with_response(
            *commands.set_music(MusicAction.OFF)
        )
        if result is None or not result.is_ok():
            return False
        _LOGGER.info("Music mode disabled on %s", self)
        return await self.connect()
