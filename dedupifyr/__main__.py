"""
Allow running the package with: python -m dedupifyr

Examples:
    python -m dedupifyr                      # Interactive console
    python -m dedupifyr /path/to/photos      # Run one request and exit
    python -m dedupifyr config --init        # Create example config file
"""

import sys


def main():
    if len(sys.argv) > 1 and sys.argv[1] == 'config':
        sys.argv.pop(1)
        from .user_config import get_user_config

        config = get_user_config()

        if '--init' in sys.argv or '-i' in sys.argv:
            if config.create_example_config():
                print(f"✓ Created example configuration file at:")
                print(f"  {config.config_file_path}")
            else:
                print(f"✗ Failed to create configuration file.")
                sys.exit(1)
        else:
            print(f"Configuration file: {config.config_file_path}")
            if config.config_file_path.exists():
                print(f"Status: ✓ Found")
            else:
                print(f"Status: ✗ Not found (using defaults)")
                print(f"\nRun 'python -m dedupifyr config --init' to create one.")

            print(f"\nCurrent settings:")
            print(f"  search_depth: {config.search_depth}")
            print(f"  bias_factor: {config.bias_factor}")
            print(f"  workers: {config.workers}")
            print(f"  calculator: {config.calculator}")
    else:
        from .cli import main as cli_main
        sys.exit(cli_main())


if __name__ == '__main__':
    main()
