from fzy_tmux.cli import main

raise SystemExit(main())
