"""Terminal layout helpers: view coordinates and resolution of names and colours."""