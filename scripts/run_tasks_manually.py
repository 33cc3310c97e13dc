# run_tasks_manually.py
import asyncio
import logging
import sys
import os

# Allows running from the repo root without installing the package
sys.path.append(os.getcwd())

from foodconnect.tasks_registry import TASKS


async def main(selected: list[str]):
    """
    Runs the maintenance jobs one after another (all of them, or the ones named on the command line).
    """
    names = selected or list(TASKS)
    unknown = [name for name in names if name not in TASKS]
    if unknown:
        print(f"Unknown task(s): {', '.join(unknown)}. Available: {', '.join(TASKS)}")
        return

    print("--- Manual Task Runner ---")
    for index, name in enumerate(names, start=1):
        task = TASKS[name]
        print(f"\n[{index}/{len(names)}] Running: {name}...")
        if task["is_async"]:
            await task["function"]()
        else:
            # Sync jobs go to a thread so the event loop stays free
            await asyncio.to_thread(task["function"])
        print("Done.")

    print("\n--- All tasks completed! ---")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, stream=sys.stdout, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    try:
        asyncio.run(main(sys.argv[1:]))
    except KeyboardInterrupt:
        print("\nScript interrupted by user.")
