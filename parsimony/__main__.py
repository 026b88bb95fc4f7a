import asyncio
import logging
import sys

import parsimony.config
import parsimony.osc
import parsimony.session


# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def serve (config_path: str) -> None:

	"""
	Run a voice-leading session behind an OSC bridge until cancelled.
	"""

	voice_config, osc_config = parsimony.config.load_config(config_path)

	session = parsimony.session.VoiceLeadingSession(voice_config)
	bridge = parsimony.osc.OscBridge(
		session,
		receive_port = osc_config.receive_port,
		send_port = osc_config.send_port,
		send_host = osc_config.send_host
	)

	await bridge.start()

	try:
		await asyncio.Event().wait()
	finally:
		await bridge.stop()


def main () -> None:

	"""
	Main entry point: ``python -m parsimony [config.yaml]``.
	"""

	config_path = sys.argv[1] if len(sys.argv) > 1 else "config.yaml"

	logger.info("Parsimony starting...")

	try:
		asyncio.run(serve(config_path))
	except KeyboardInterrupt:
		logger.info("Stopping...")


if __name__ == "__main__":
	main()
