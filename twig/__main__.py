import sys

from twig.main import main

sys.exit(main())
