TRANSLATIONS_AGENDA = {
    "es": {
        "app.title": "ClaveSalud",
        "nav.agenda": "Agenda",
        "nav.plantillas_whatsapp": "Plantillas WhatsApp",
        "nav.solo_lectura": "solo lectura",
        "menu.archivo": "Archivo",
        "menu.salir": "Salir",
        "app.rol.admin": "Administración",
        "app.rol.readonly": "Solo lectura",
        "agenda.title": "Agenda del profesional",
        "agenda.centro": "Centro",
        "agenda.profesional": "Profesional",
        "agenda.sin_centros": "No hay centros activos.",
        "agenda.sin_profesionales": "Este centro no tiene profesionales.",
        "agenda.mes_anterior": "Mes anterior",
        "agenda.mes_siguiente": "Mes siguiente",
        "agenda.sincronizando": "Sincronizando…",
        "agenda.solo_lectura": "Modo solo lectura",
        "agenda.configurar": "Configurar horario",
        "agenda.slots.titulo": "Bloques del {fecha}",
        "agenda.slots.vacio": "No hay bloques para este horario.",
        "agenda.slots.pasado": "Día pasado: la agenda no se puede modificar.",
        "agenda.estado.closed": "Cerrado",
        "agenda.estado.open": "Disponible",
        "agenda.estado.booked": "Reservado",
        "agenda.reservas.titulo": "Pacientes agendados",
        "agenda.reservas.vacio": "No hay pacientes agendados para este día.",
        "agenda.toast.sin_centro": "Selecciona un centro activo para modificar la agenda.",
        "agenda.toast.solo_lectura": "La agenda está en modo solo lectura.",
        "agenda.toast.sin_profesional": "Selecciona un profesional para modificar su agenda.",
        "agenda.toast.fecha_pasada": "No se pueden modificar bloques de días pasados.",
        "agenda.toast.bloque_abierto": "Bloque abierto disponible.",
        "agenda.toast.bloque_cerrado": "Bloque cerrado (horario bloqueado).",
        "agenda.toast.bloque_ocupado": "Ese bloque acaba de cambiar desde otro puesto o por una reserva; se muestra su estado actual.",
        "agenda.toast.error_guardar": "No se pudo guardar el cambio en la agenda. Intenta de nuevo.",
        "agenda.toast.error_lectura": "No se pudo cargar la agenda. Se muestran todos los bloques cerrados.",
        "agenda.toast.config_guardada": "Horario de atención guardado.",
        "agenda.detalle.titulo": "Detalle de la reserva",
        "agenda.detalle.paciente": "Paciente",
        "agenda.detalle.rut": "RUT",
        "agenda.detalle.telefono": "Teléfono",
        "agenda.detalle.fecha": "Fecha",
        "agenda.detalle.hora": "Hora",
        "agenda.detalle.confirmar_whatsapp": "Confirmar por WhatsApp",
        "agenda.detalle.cancelar_whatsapp": "Pedir cancelación por WhatsApp",
        "agenda.detalle.plantillas": "Plantillas del centro",
        "agenda.detalle.sin_plantillas": "No hay plantillas habilitadas.",
        "agenda.detalle.cerrar": "Cerrar",
        "agenda.config.titulo": "Horario de atención",
        "agenda.config.inicio": "Hora de inicio",
        "agenda.config.fin": "Hora de término",
        "agenda.config.duracion": "Duración del bloque (min)",
        "agenda.config.vista_previa": "{total} bloques por día",
        "plantillas.title": "Plantillas de WhatsApp",
        "plantillas.ayuda": "Marcadores permitidos: {placeholders}",
        "plantillas.col.titulo": "Título",
        "plantillas.col.cuerpo": "Mensaje",
        "plantillas.col.habilitada": "Habilitada",
        "plantillas.agregar": "Agregar",
        "plantillas.eliminar": "Eliminar",
        "plantillas.guardar": "Guardar",
        "plantillas.guardadas": "Plantillas guardadas.",
        "plantillas.error.placeholders": "La plantilla '{titulo}' usa marcadores no permitidos: {placeholders}",
        "plantillas.error.duplicadas": "Hay plantillas repetidas.",
        "common.aceptar": "Aceptar",
        "common.cancelar": "Cancelar",
        "common.error": "Error",
        "common.aviso": "Aviso",
        "common.error_inesperado": "Se produjo un error inesperado. Revisa los logs.",
        "dias.cortos": "Lu,Ma,Mi,Ju,Vi,Sa,Do",
        "meses": "Enero,Febrero,Marzo,Abril,Mayo,Junio,Julio,Agosto,Septiembre,Octubre,Noviembre,Diciembre",
    },
    "en": {
        "app.title": "ClaveSalud",
        "nav.agenda": "Schedule",
        "nav.plantillas_whatsapp": "WhatsApp templates",
        "nav.solo_lectura": "read only",
        "menu.archivo": "File",
        "menu.salir": "Exit",
        "app.rol.admin": "Administrator",
        "app.rol.readonly": "Read only",
        "agenda.title": "Professional schedule",
        "agenda.centro": "Center",
        "agenda.profesional": "Professional",
        "agenda.sin_centros": "There are no active centers.",
        "agenda.sin_profesionales": "This center has no professionals.",
        "agenda.mes_anterior": "Previous month",
        "agenda.mes_siguiente": "Next month",
        "agenda.sincronizando": "Syncing…",
        "agenda.solo_lectura": "Read-only mode",
        "agenda.configurar": "Working hours",
        "agenda.slots.titulo": "Slots for {fecha}",
        "agenda.slots.vacio": "There are no slots for these working hours.",
        "agenda.slots.pasado": "Past day: the schedule cannot be changed.",
        "agenda.estado.closed": "Closed",
        "agenda.estado.open": "Available",
        "agenda.estado.booked": "Booked",
        "agenda.reservas.titulo": "Booked patients",
        "agenda.reservas.vacio": "No patients booked for this day.",
        "agenda.toast.sin_centro": "Select an active center to change the schedule.",
        "agenda.toast.solo_lectura": "The schedule is in read-only mode.",
        "agenda.toast.sin_profesional": "Select a professional to change their schedule.",
        "agenda.toast.fecha_pasada": "Slots on past days cannot be changed.",
        "agenda.toast.bloque_abierto": "Slot opened and available.",
        "agenda.toast.bloque_cerrado": "Slot closed (time blocked).",
        "agenda.toast.bloque_ocupado": "That slot just changed from another workstation or a booking; showing its current state.",
        "agenda.toast.error_guardar": "The schedule change could not be saved. Please try again.",
        "agenda.toast.error_lectura": "The schedule could not be loaded. All slots are shown as closed.",
        "agenda.toast.config_guardada": "Working hours saved.",
        "agenda.detalle.titulo": "Booking details",
        "agenda.detalle.paciente": "Patient",
        "agenda.detalle.rut": "RUT",
        "agenda.detalle.telefono": "Phone",
        "agenda.detalle.fecha": "Date",
        "agenda.detalle.hora": "Time",
        "agenda.detalle.confirmar_whatsapp": "Confirm via WhatsApp",
        "agenda.detalle.cancelar_whatsapp": "Request cancellation via WhatsApp",
        "agenda.detalle.plantillas": "Center templates",
        "agenda.detalle.sin_plantillas": "There are no enabled templates.",
        "agenda.detalle.cerrar": "Close",
        "agenda.config.titulo": "Working hours",
        "agenda.config.inicio": "Start time",
        "agenda.config.fin": "End time",
        "agenda.config.duracion": "Slot length (min)",
        "agenda.config.vista_previa": "{total} slots per day",
        "plantillas.title": "WhatsApp templates",
        "plantillas.ayuda": "Allowed placeholders: {placeholders}",
        "plantillas.col.titulo": "Title",
        "plantillas.col.cuerpo": "Message",
        "plantillas.col.habilitada": "Enabled",
        "plantillas.agregar": "Add",
        "plantillas.eliminar": "Remove",
        "plantillas.guardar": "Save",
        "plantillas.guardadas": "Templates saved.",
        "plantillas.error.placeholders": "Template '{titulo}' uses placeholders that are not allowed: {placeholders}",
        "plantillas.error.duplicadas": "There are repeated templates.",
        "common.aceptar": "OK",
        "common.cancelar": "Cancel",
        "common.error": "Error",
        "common.aviso": "Warning",
        "common.error_inesperado": "An unexpected error occurred. Check the logs.",
        "dias.cortos": "Mo,Tu,We,Th,Fr,Sa,Su",
        "meses": "January,February,March,April,May,June,July,August,September,October,November,December",
    },
}
