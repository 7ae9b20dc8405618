#!/usr/bin/env python3
"""
OpenBCI Driver - Main Entry Point

Opens the board (or a simulated board), optionally resets it, starts
streaming and dumps the raw packet stream as hex.
"""

import sys
import argparse
import logging
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))


def list_ports():
    """Print the serial ports pyserial can see."""
    from hardware.transport import list_available_ports

    ports = list_available_ports()
    if not ports:
        print("No serial ports found.")
        return
    for port in ports:
        print(f"{port['device']:<20} {port['description']} [{port['hwid']}]")


def build_device(args):
    """Create a Device over the simulator or a real serial port."""
    from hardware.device import Device
    from hardware.handshake import HandshakeSettings
    from hardware.simulator import NumpyByteSource, SimulatedPeripheral
    from hardware.transport import open_device

    handshake_settings = HandshakeSettings(max_polls=args.max_polls)

    if args.simulate:
        peripheral = SimulatedPeripheral(random_source=NumpyByteSource(args.seed))
        return Device(peripheral, handshake_settings=handshake_settings)

    return open_device(
        args.port,
        baud_rate=args.baud,
        read_timeout=args.timeout,
        handshake_settings=handshake_settings,
    )


def run_stream(args) -> int:
    """Open the device, start it and print ``args.bytes`` streamed bytes."""
    from core.constants import Command, PACKET_SIZE
    from core.exceptions import DriverError, NoDataAvailable

    try:
        device = build_device(args)
    except DriverError as e:
        print(f"Failed to open device: {e}", file=sys.stderr)
        return 1

    with device:
        try:
            if args.reset:
                n = device.write(Command.RESET.to_bytes())
                print(f"Reset handshake complete ({n} command bytes written)")
            else:
                device.write(Command.START.to_bytes())

            remaining = args.bytes
            buf = bytearray(PACKET_SIZE)
            while remaining > 0:
                chunk = memoryview(buf)[:min(remaining, len(buf))]
                try:
                    n = device.read(chunk)
                except NoDataAvailable:
                    continue
                if n:
                    print(bytes(chunk[:n]).hex(" "))
                remaining -= n

            device.write(Command.STOP.to_bytes())
        except DriverError as e:
            print(f"Device error: {e}", file=sys.stderr)
            return 1

    return 0


def main():
    """Main entry point with argument parsing."""
    parser = argparse.ArgumentParser(
        description='OpenBCI Driver - stream raw packets from the board',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --simulate              Stream from the simulated board
  python main.py --port /dev/ttyUSB0     Stream from a real board
  python main.py --port COM3 --reset     Reset the board before streaming
  python main.py --list-ports            Show available serial ports
        """
    )
    parser.add_argument('--list-ports', action='store_true', help='List serial ports and exit')
    parser.add_argument('--simulate', '-s', action='store_true', help='Use the simulated board')
    parser.add_argument('--port', '-p', default=None, help='Serial port (auto-detected if omitted)')
    parser.add_argument('--baud', type=int, default=115200, help='Baud rate (default: 115200)')
    parser.add_argument('--timeout', type=float, default=1.0, help='Read timeout in seconds')
    parser.add_argument('--reset', '-r', action='store_true', help='Run the reset handshake first')
    parser.add_argument(
        '--max-polls',
        type=int,
        default=None,
        help='Give up the reset handshake after this many reads (default: wait forever)'
    )
    parser.add_argument('--bytes', '-n', type=int, default=340, help='Number of bytes to read')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for simulated payloads')
    parser.add_argument('--log-file', default=None, help='Also write logs to this file')
    parser.add_argument('--verbose', '-v', action='store_true', help='Log every command write')

    args = parser.parse_args()

    from core.session_logging import configure_logging
    configure_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)

    if args.list_ports:
        list_ports()
        return 0

    if args.simulate and args.reset and args.max_polls is None:
        # The simulated board never answers a reset with init bytes
        parser.error("--reset with --simulate needs --max-polls")

    return run_stream(args)


if __name__ == "__main__":
    sys.exit(main())
