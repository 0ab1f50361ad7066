from clavesalud.app.main import main

raise SystemExit(main())
