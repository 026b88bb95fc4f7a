"""OSC bridge between a host patch and a voice-leading session.

Each host message name maps onto one session method. The bridge listens on
a UDP port (default 9000) and sends results to a target host/port (default
127.0.0.1:9001).

Receive Handlers
────────────────
- ``/current <pitches...>``: Set the current chord
- ``/root <int | note name>``: Store the root (no recalculation)
- ``/chord <intervals... | quality name>``: Chord relative to the root (recalculates)
- ``/target <pitch classes...>``: Absolute target (recalculates)
- ``/feedback <0|1>``: Toggle feedback
- ``/debug <0|1>``: Toggle debug events
- ``/recalculate``: Recalculate with the current state
- ``/clear``: Forget the current chord and target
- ``/distance <pitches...>``: Distance matrix from the current chord

Send Events
───────────
- ``/chord <pitches...>``: Output chord
- ``/cost <float>``: Voice-leading cost
- ``/root <int>``: Root as a MIDI note (48 + root)
- ``/info <anchor> <candidates> <voices>``: Diagnostics (anchor -1 when unused)
- ``/warning <string>``: One message per warning or rejection
- ``/distance/size <int>`` then ``/distance/matrix <floats...>``
"""

import asyncio
import logging
import typing

import pythonosc.dispatcher
import pythonosc.osc_server
import pythonosc.udp_client

import parsimony.errors
import parsimony.intervals
import parsimony.pitch
import parsimony.session


logger = logging.getLogger(__name__)


class OscBridge:

	"""Async OSC server/client that drives a :class:`~parsimony.session.VoiceLeadingSession`."""

	def __init__ (
		self,
		session: parsimony.session.VoiceLeadingSession,
		receive_port: int = 9000,
		send_port: int = 9001,
		send_host: str = "127.0.0.1"
	) -> None:

		self._session = session
		self._receive_port = receive_port
		self._send_port = send_port
		self._send_host = send_host

		self._server: typing.Optional[typing.Any] = None
		self._transport: typing.Optional[asyncio.BaseTransport] = None
		self._client: typing.Optional[pythonosc.udp_client.SimpleUDPClient] = None
		self._dispatcher = pythonosc.dispatcher.Dispatcher()

		self._dispatcher.map("/current", self._handle_current)
		self._dispatcher.map("/root", self._handle_root)
		self._dispatcher.map("/chord", self._handle_chord)
		self._dispatcher.map("/target", self._handle_target)
		self._dispatcher.map("/feedback", self._handle_feedback)
		self._dispatcher.map("/debug", self._handle_debug)
		self._dispatcher.map("/recalculate", self._handle_recalculate)
		self._dispatcher.map("/clear", self._handle_clear)
		self._dispatcher.map("/distance", self._handle_distance)

		session.events.on("result", self._send_result)
		session.events.on("warning", self._send_warning)


	async def start (self) -> None:

		"""Start the OSC server and client."""

		self._client = pythonosc.udp_client.SimpleUDPClient(self._send_host, self._send_port)

		self._server = pythonosc.osc_server.AsyncIOOSCUDPServer(
			("0.0.0.0", self._receive_port),
			self._dispatcher,
			asyncio.get_event_loop()  # type: ignore[arg-type]
		)

		transport, _ = await self._server.create_serve_endpoint()
		self._transport = transport

		logger.info(f"OSC listening on :{self._receive_port}, sending to {self._send_host}:{self._send_port}")


	async def stop (self) -> None:

		"""Stop the OSC server."""

		if self._transport:
			self._transport.close()
			self._transport = None
			logger.info("OSC server stopped")


	def send (self, address: str, *args: typing.Any) -> None:

		"""Send an OSC message (no-op before :meth:`start`)."""

		if self._client:
			try:
				self._client.send_message(address, list(args))
			except OSError as e:
				logger.warning(f"OSC send error: {e}")


	# Outgoing

	def _send_result (self, result: parsimony.session.Result) -> None:

		anchor = result.anchor_octave if result.anchor_octave is not None else -1

		self.send("/chord", *result.output_chord)
		self.send("/cost", float(result.cost))
		self.send("/root", result.root_note)
		self.send("/info", anchor, result.candidate_count, result.voice_count)

		for message in result.warnings:
			self.send("/warning", message)

	def _send_warning (self, message: str) -> None:
		self.send("/warning", message)


	def _invalid (self, address: str, args: typing.Tuple[typing.Any, ...]) -> None:

		"""Report unparseable arguments through the session, which also sends /warning."""

		self._session.reject(parsimony.errors.InvalidMessage(f"{address} cannot use arguments {list(args)}"))


	# Handlers

	def _handle_current (self, address: str, *args: typing.Any) -> None:
		try:
			self._session.set_current_chord([int(a) for a in args])
		except (ValueError, TypeError):
			self._invalid(address, args)

	def _handle_root (self, address: str, *args: typing.Any) -> None:
		if not args:
			self._invalid(address, args)
			return
		try:
			if isinstance(args[0], str):
				root = parsimony.pitch.key_name_to_pc(args[0])
			else:
				root = int(args[0])
			self._session.set_root(root)
		except (ValueError, TypeError):
			self._invalid(address, args)

	def _handle_chord (self, address: str, *args: typing.Any) -> None:
		try:
			if len(args) == 1 and isinstance(args[0], str):
				intervals = parsimony.intervals.get_intervals(args[0])
			else:
				intervals = [int(a) for a in args]
			self._session.set_chord(intervals)
		except (ValueError, TypeError):
			self._invalid(address, args)

	def _handle_target (self, address: str, *args: typing.Any) -> None:
		try:
			self._session.set_target_absolute([int(a) for a in args])
		except (ValueError, TypeError):
			self._invalid(address, args)

	def _handle_feedback (self, address: str, *args: typing.Any) -> None:
		if args:
			self._session.set_feedback(bool(args[0]))

	def _handle_debug (self, address: str, *args: typing.Any) -> None:
		if args:
			self._session.set_debug(bool(args[0]))

	def _handle_recalculate (self, address: str, *args: typing.Any) -> None:
		self._session.recalculate()

	def _handle_clear (self, address: str, *args: typing.Any) -> None:
		self._session.clear()

	def _handle_distance (self, address: str, *args: typing.Any) -> None:
		try:
			matrix = self._session.distance_matrix([int(a) for a in args])
		except (ValueError, TypeError):
			self._invalid(address, args)
			return
		if matrix is None:
			return
		self.send("/distance/size", len(matrix))
		self.send("/distance/matrix", *[cell for row in matrix for cell in row])
