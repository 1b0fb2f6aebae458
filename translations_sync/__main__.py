from translations_sync.scripts.sync_translations import main

raise SystemExit(main())
