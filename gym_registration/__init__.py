"""gRPC-сервис регистрации в спортзал: тренирующиеся, тренировки, расписания, записи."""

__version__ = "0.1.0"
