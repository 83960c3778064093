import time

from dispatchbot.commands import Argument, command
from dispatchbot.core.utils import send_response

PLUGIN_METADATA = {
    "name": "Ping",
    "version": "1.0.0",
    "author": "dispatchbot",
    "description": "Latency check and echo commands",
}


@command("ping", description="Check whether the bot is alive", aliases=["pong"])
async def ping(ctx, args, guild=None) -> None:
    started = time.perf_counter()
    response = await ctx.respond("🏓 Pong!")
    elapsed = (time.perf_counter() - started) * 1000
    await response.edit(f"🏓 Pong! ({elapsed:.0f}ms)")


@command(
    "say",
    description="Repeat a message back",
    aliases=["echo"],
    arguments=[
        Argument(
            "text",
            type="...string",
            required=True,
            missing=lambda ctx: send_response(ctx, "tell me what to say."),
        )
    ],
)
async def say(ctx, args, guild=None) -> None:
    await ctx.respond(args["text"])
