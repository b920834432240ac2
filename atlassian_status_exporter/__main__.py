from atlassian_status_exporter.cli import main

raise SystemExit(main())
