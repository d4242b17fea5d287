import time
from flask import Blueprint, Flask, request, jsonify
from werkzeug.exceptions import BadRequest
from redis import Redis
from rq import Queue
from rq.job import Job
from rq.exceptions import NoSuchJobError

from . import config
from .errors import ConfigurationError
from .jobs import generate_primes_job

primes_bp = Blueprint("primes_bp", __name__)

_queue = None

def get_queue() -> Queue:
    global _queue
    if _queue is None:
        redis_conn = Redis.from_url(config.REDIS_URL)
        _queue = Queue("primes", connection=redis_conn, default_timeout=60*60)
    return _queue

# ------------------ helpers ------------------
def _job_summary(job: Job) -> dict:
    meta = job.meta or {}
    submitted = meta.get("submitted")
    d = {
        "job_id": job.id,
        "status": job.get_status(),
        "bits": meta.get("bits"),
        "count": meta.get("count"),
        "waited_s": round(time.time() - submitted, 3) if submitted else None,
    }
    if job.is_finished:
        d["result"] = job.return_value()
    elif job.is_failed:
        # last traceback line is the exception itself
        lines = (job.exc_info or "").strip().splitlines()
        d["error"] = lines[-1] if lines else "failed"
    return d

def _params(data) -> tuple[int, int]:
    try:
        bits = config.validate_bits(data.get("bits", ""))
        count = config.validate_count(data.get("count", config.DEFAULT_COUNT))
    except ConfigurationError as e:
        raise BadRequest(str(e))
    if bits > config.max_bits():
        raise BadRequest(f"bits must be <= {config.max_bits()}")
    return bits, count

# ------------------ API ------------------
@primes_bp.get("/api/health")
def health():
    return jsonify({"ok": True, "time": int(time.time())})

@primes_bp.get("/api/primes")
def primes_sync():
    bits, count = _params(request.args)
    if count > config.max_sync_count():
        raise BadRequest(f"count must be <= {config.max_sync_count()} here; use /api/primes/submit")
    return jsonify(generate_primes_job(bits, count))

@primes_bp.post("/api/primes/submit")
def primes_submit():
    data = request.get_json(silent=True) or {}
    bits, count = _params(data)
    q = get_queue()
    job = q.enqueue(generate_primes_job, bits, count,
                    meta={"bits": bits, "count": count, "submitted": time.time()})
    return jsonify({"job_id": job.id, "status": job.get_status(), "bits": bits, "count": count})

@primes_bp.get("/api/job/<job_id>")
def job_status(job_id):
    q = get_queue()
    try:
        job = Job.fetch(job_id, connection=q.connection)
    except NoSuchJobError:
        return jsonify({"error": "unknown job"}), 404
    return jsonify(_job_summary(job))


def create_app() -> Flask:
    app = Flask(__name__)
    app.register_blueprint(primes_bp)
    return app
