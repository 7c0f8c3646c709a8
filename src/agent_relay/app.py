"""Line-oriented session loop and the ``agent-relay`` console entry point."""

import sys
import asyncio
from typing import TextIO, Optional

from agent_relay.modules.logger import logger
from agent_relay.modules.config import Config
from agent_relay.utils import get_dispatcher
from agent_relay.errors import ConfigurationError
from agent_relay.dispatchers import BaseDispatcher
from agent_relay.constants import USER_PROMPT, REPLY_PREFIX


class SessionLoop:
    """Feed input lines to a dispatcher one at a time and write back the replies.

    Each line is handled to completion, nested transfers included, before
    the next line is read. Blank lines are forwarded like any other input.
    """

    def __init__(
        self,
        dispatcher: BaseDispatcher,
        input_stream: Optional[TextIO] = None,
        output_stream: Optional[TextIO] = None,
        prompt: str = USER_PROMPT,
        reply_prefix: str = REPLY_PREFIX,
    ) -> None:
        self.dispatcher = dispatcher
        self.input_stream = input_stream if input_stream is not None else sys.stdin
        self.output_stream = output_stream if output_stream is not None else sys.stdout
        self.prompt = prompt
        self.reply_prefix = reply_prefix

    def _write(self, text: str) -> None:
        self.output_stream.write(text)
        self.output_stream.flush()

    async def run(self) -> int:
        """Run until end of input and return the number of lines handled."""
        handled = 0
        self._write(self.prompt)

        while True:
            line = await asyncio.to_thread(self.input_stream.readline)
            if line == "":
                break

            utterance = line.rstrip("\r\n")
            logger.log("user", utterance)

            reply = await self.dispatcher.handle(utterance)
            logger.log("ai", reply)

            self._write(f"{self.reply_prefix}{reply}\n")
            handled += 1
            self._write(self.prompt)

        return handled


def main() -> None:
    config = Config.load()

    try:
        dispatcher = get_dispatcher(config)
    except (ConfigurationError, RuntimeError, ValueError) as e:
        logger.event("session.init.error", error=str(e))
        print(f"Failed to initialize agents: {e}", file=sys.stderr)
        sys.exit(1)

    logger.event("session.start", agents=",".join(dispatcher.agent_names))
    try:
        handled = asyncio.run(SessionLoop(dispatcher).run())
    except KeyboardInterrupt:
        print(file=sys.stderr)
        return

    logger.event("session.end", turns=str(handled))


if __name__ == "__main__":
    main()
