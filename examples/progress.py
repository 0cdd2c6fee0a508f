# progress.py

import argparse
import asyncio
import random

from liveline import Output


async def download(output: Output, name: str, size: int) -> None:
    bar = output.dline([name, "[" + "." * 20 + "]", "0%"])
    done = 0
    while done < size:
        await asyncio.sleep(random.uniform(0.02, 0.1))
        done = min(size, done + random.randint(1, 8))
        pct = done * 100 // size
        bar.update([name, "[" + "#" * (pct // 5) + "." * (20 - pct // 5) + "]", f"{pct}%"])
    bar.close()
    output.line(f"{name} finished")


async def main():
    parser = argparse.ArgumentParser(description='liveline progress demo')
    parser.add_argument('--fps', type=float, default=10,
        help='Maximum redraws per second')
    parser.add_argument('--enable-logging',
        action='store_true',
        help='Enable debug logging')
    parser.add_argument('--log-file',
        help='Log file path (use "-" for stderr)')
    args = parser.parse_args()

    async with Output(logging_enabled=args.enable_logging, log_file=args.log_file) as output:
        output.set_max_fps(args.fps)
        output.line("Fetching packages")
        spinner = output.dline("waiting")
        await asyncio.gather(*(download(output, f"pkg-{i}", 100) for i in range(3)))
        spinner.delete()
        output.line("All done")


if __name__ == "__main__":
    asyncio.run(main())
