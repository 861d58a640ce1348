import argparse
import logging

from colorama import Fore, Style

from lifxcontrol import (
    LifxControl, load_config, run_with_keyboard_interrupt,
    Response, StateServicePayload, StatePayload,
)


def display_response(resp: Response) -> None:
    print(Fore.CYAN + "Response:" + Style.RESET_ALL)
    print(f"Size: {resp.size}")
    print(f"Source: {resp.source}")
    print(f"Mac addr: {resp.mac_address}")
    print(f"Firmware: {resp.firmware}")
    print(f"Sequence num: {resp.sequence_number}")
    print(f"Reserved_1 (timestamp?): {resp.reserved_1}")
    print(f"Message type: {resp.message_type}")
    print(f"Reserved_2: {resp.reserved_2}")
    match resp.payload:
        case StateServicePayload(service=service, port=port, unknown=unknown):
            print(f"Service: {service} ({resp.payload.service_type()})")
            print(f"Port: {port}")
            print(f"Unknown: {unknown}")
        case StatePayload() as state:
            print(f"Body: {state.body}")
            print(f"Hue/Sat/Bri/Kelvin words: {state.hue} {state.saturation} {state.brightness} {state.kelvin}")


async def discover(config_path: str, state: bool) -> None:
    config = load_config(config_path)
    async with LifxControl(config) as lifx:
        light = await lifx.discover()
        display_response(light.device.response)
        if state:
            colour = await light.refresh()
            display_response(light.device.response)
            print(Fore.GREEN + f"Colour: {colour}" + Style.RESET_ALL)


def main() -> None:
    ap = argparse.ArgumentParser(description="Discover a LIFX light and print its reply")
    ap.add_argument("--config", default="examples/config.yaml", help="YAML configuration file")
    ap.add_argument("--state", action="store_true", help="Also query the light's colour state")
    ap.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    print("Started.")
    run_with_keyboard_interrupt(lambda: discover(args.config, args.state))
    print("Finished.")


if __name__ == "__main__":
    main()
