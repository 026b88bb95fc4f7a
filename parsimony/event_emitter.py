import typing


CallbackType = typing.Callable[..., typing.Any]


class EventEmitter:

	"""
	A minimal synchronous event emitter.

	The session publishes ``"result"``, ``"warning"`` and ``"debug"`` events
	through one of these; listeners run immediately, in registration order.
	"""

	def __init__ (self) -> None:

		"""
		Initialize an empty event registry.
		"""

		self._listeners: typing.Dict[str, typing.List[CallbackType]] = {}


	def on (self, event_name: str, callback: CallbackType) -> None:

		"""
		Register a callback for an event name.
		"""

		self._listeners.setdefault(event_name, []).append(callback)

	def off (self, event_name: str, callback: CallbackType) -> None:

		"""
		Unregister a previously registered callback.

		Raises ``ValueError`` if the callback is not registered for the event.
		"""

		if event_name not in self._listeners or callback not in self._listeners[event_name]:
			raise ValueError(f"Callback not registered for event {event_name!r}")

		self._listeners[event_name].remove(callback)


	def has_listeners (self, event_name: str) -> bool:

		"""Return True when at least one callback is registered for the event."""

		return bool(self._listeners.get(event_name))


	def emit (self, event_name: str, *args: typing.Any, **kwargs: typing.Any) -> None:

		"""
		Call every listener for an event with the given arguments.
		"""

		for callback in list(self._listeners.get(event_name, [])):
			callback(*args, **kwargs)
