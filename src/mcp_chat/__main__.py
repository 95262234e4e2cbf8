import sys

from mcp_chat.cli import main

if __name__ == "__main__":
    sys.exit(main())
