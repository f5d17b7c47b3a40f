from stats_monitor.monitor import main

raise SystemExit(main())
