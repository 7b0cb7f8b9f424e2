"""FastAPI server setup and routes"""
import asyncio
import time
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Optional
from fastapi import FastAPI, Response, HTTPException
from catalog.base import CatalogLoader
from config import Config
from metrics.exporters.prometheus import PrometheusExporter
from metrics.registry import GatherError, MetricsRegistry
from metrics.sink import Accumulator
from logging_config import get_logger, log_error


logger = get_logger(__name__)


class MetricsServer:
    """FastAPI server polling the device in the background and serving the last poll"""
    
    def __init__(self, config: Config, loader: CatalogLoader, registry: Optional[MetricsRegistry] = None):
        self.config = config
        self.app = FastAPI(
            title="FRITZ!Box Metrics Exporter",
            version=config.service_version,
            docs_url=None,
            redoc_url=None,
            openapi_url=None
        )
        self.registry = registry or MetricsRegistry(config, loader)
        self.exporter = PrometheusExporter(config.prometheus_file)
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="fritzbox_poll")
        self._poll_lock = asyncio.Lock()
        
        # Collection state
        self.start_time = time.time()
        self.last_collection_time = 0
        self.collection_count = 0
        self.collection_errors = 0
        self.last_error: Optional[str] = None
        self.current_metrics = "# No metrics available\n"
        self.collection_task = None
        
        self._setup_routes()
        self._setup_events()
    
    def get_app(self) -> FastAPI:
        return self.app
    
    def _setup_routes(self):
        """Setup FastAPI routes"""
        
        @self.app.get('/metrics', response_class=Response)
        def get_metrics():
            """Serve the records of the last successful poll in Prometheus format"""
            return Response(self.current_metrics, media_type='text/plain')
        
        @self.app.get('/health')
        def health_check():
            """Health check endpoint"""
            age = time.time() - self.last_collection_time if self.last_collection_time > 0 else float('inf')
            is_healthy = age < self.config.collection_interval * 2
            
            health_data = {
                "status": "healthy" if is_healthy else "unhealthy",
                "last_collection_seconds_ago": round(age, 1) if age != float('inf') else None,
                "collection_interval": self.config.collection_interval,
                "total_collections": self.collection_count,
                "collection_errors": self.collection_errors,
                "exporter_healthy": self.exporter.is_healthy()
            }
            
            if not is_healthy:
                raise HTTPException(status_code=503, detail=health_data)
            
            return health_data
        
        @self.app.get('/status')
        def get_status():
            """Detailed status information"""
            age = time.time() - self.last_collection_time if self.last_collection_time > 0 else float('inf')
            
            return {
                "service": {
                    "name": self.config.service_name,
                    "version": self.config.service_version,
                    "uptime_seconds": round(time.time() - self.start_time, 1),
                    "hostname": os.uname().nodename
                },
                "device": {
                    "host": self.config.effective_host(),
                    "port": self.config.effective_port()
                },
                "collection": {
                    "interval_seconds": self.config.collection_interval,
                    "last_collection_seconds_ago": round(age, 1) if age != float('inf') else None,
                    "total_collections": self.collection_count,
                    "collection_errors": self.collection_errors,
                    "last_error": self.last_error
                },
                "collectors": self.registry.get_collector_status()
            }
        
        @self.app.post('/collect')
        async def manual_collect():
            """Manually trigger a poll"""
            try:
                records = await self._collect_metrics()
            except GatherError as e:
                raise HTTPException(status_code=502, detail={"error": str(e)})
            return {
                "success": True,
                "records": records,
                "collection_count": self.collection_count
            }
    
    def _setup_events(self):
        """Setup FastAPI startup/shutdown events"""
        
        @self.app.on_event("startup")
        async def startup_event():
            self.start_time = time.time()
            self.collection_task = asyncio.create_task(self._collection_loop())
        
        @self.app.on_event("shutdown")
        async def shutdown_event():
            logger.info("Shutting down metrics exporter", event_type="server_shutdown")
            
            if self.collection_task:
                self.collection_task.cancel()
                try:
                    await self.collection_task
                except asyncio.CancelledError:
                    pass
            
            self._executor.shutdown(wait=False)
    
    async def _collection_loop(self):
        """Background poll loop, backing off after a failed catalog load"""
        while True:
            try:
                await self._collect_metrics()
                delay = self.config.collection_interval
            except GatherError:
                delay = self.config.service_load_retry_seconds
            except Exception as e:
                log_error(logger, e, {"component": "collection_loop", "collection_errors": self.collection_errors})
                delay = self.config.collection_interval

            try:
                await asyncio.sleep(delay)
            except asyncio.CancelledError:
                break
    
    async def _collect_metrics(self) -> int:
        """Run one poll in the worker thread and publish its records"""
        async with self._poll_lock:
            self.collection_count += 1
            sink = Accumulator()
            loop = asyncio.get_running_loop()
            
            try:
                emitted = await loop.run_in_executor(self._executor, self.registry.gather, sink)
            except Exception as e:
                self.collection_errors += 1
                self.last_error = str(e)
                raise
            
            self.current_metrics = self.exporter.export_records(sink.records)
            self.last_collection_time = time.time()
            self.last_error = None
            return emitted
