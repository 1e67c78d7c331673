import sys

from cipher_chat.cli import main

sys.exit(main())
